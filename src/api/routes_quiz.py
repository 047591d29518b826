from __future__ import annotations

from functools import wraps

from flask import Blueprint, jsonify, request

from src.domain.models.api_models import InsertAllRequest, UpdateAllRequest
from src.domain.models.db_models import Quiz, QuizUpdate
from src.infrastructure.database import connection, quiz_repository
from quiz_utils.logger_utils import logger

quiz_bp = Blueprint('front_end_quiz', __name__)


def fails_with(message: str):
    """
    Collapse any failure of the wrapped view into a 500 with a fixed message.

    The typed error is logged with the route name and path parameters and
    then discarded.
    """
    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            try:
                return view(*args, **kwargs)
            except Exception as e:
                logger.error(
                    message,
                    extra={"route": view.__name__, "error": str(e), **kwargs},
                    exc_info=True,
                )
                return jsonify({"error": message}), 500
        return wrapper
    return decorator


@quiz_bp.route('/connect', methods=['GET'])
@fails_with('Failed to connect to MongoDB')
def check_connection():
    connection.ping()
    return '', 200


@quiz_bp.route('/data', methods=['GET'])
@fails_with('Failed to get data')
def get_data():
    quizzes = quiz_repository.get_all()
    return jsonify([quiz.to_dict() for quiz in quizzes]), 200


@quiz_bp.route('/data/<string:quiz_id>', methods=['GET'])
@fails_with('Failed to get data by id')
def get_data_by_id(quiz_id: str):
    quiz = quiz_repository.get_by_id(quiz_id)
    return jsonify(quiz.to_dict() if quiz else None), 200


@quiz_bp.route('/random', methods=['GET'])
@fails_with('Failed to get random data')
def get_random_data():
    """
    Random selection of questions by tag.

    Query: ?count=<positive int or All>&tag=<tag>&tag=<tag>
    """
    count = request.args.get('count', 'All')
    tags = request.args.getlist('tag')
    quizzes = quiz_repository.get_by_filter(count, tags)
    return jsonify([quiz.to_dict() for quiz in quizzes]), 200


@quiz_bp.route('/insert', methods=['POST'])
@fails_with('Failed to insert data')
def insert_data():
    quiz = Quiz.model_validate(request.get_json())
    ack = quiz_repository.insert_one(quiz)
    return jsonify(ack.to_dict()), 201


@quiz_bp.route('/insert-all', methods=['POST'])
@fails_with('Failed to insert all data')
def insert_all_data():
    payload = InsertAllRequest(quizzes=request.get_json())
    ack = quiz_repository.insert_many(payload.quizzes)
    return jsonify(ack.to_dict()), 201


@quiz_bp.route('/update/<string:quiz_id>', methods=['PATCH'])
@fails_with('Failed to update data')
def update_data(quiz_id: str):
    update = QuizUpdate.model_validate(request.get_json())
    ack = quiz_repository.update_one(quiz_id, update)
    return jsonify(ack.to_dict()), 200


@quiz_bp.route('/update-all', methods=['PATCH'])
@fails_with('Failed to update all data')
def update_all_data():
    payload = UpdateAllRequest.model_validate(request.get_json())
    ack = quiz_repository.update_many(payload.filter, payload.update)
    return jsonify(ack.to_dict()), 200


@quiz_bp.route('/delete/<string:quiz_id>', methods=['DELETE'])
@fails_with('Failed to delete data by id')
def delete_data(quiz_id: str):
    quiz_repository.delete_by_id(quiz_id)
    return '', 200


@quiz_bp.route('/delete-all', methods=['DELETE'])
@fails_with('Failed to delete all data')
def delete_all_data():
    quiz_repository.delete_all()
    return '', 200
