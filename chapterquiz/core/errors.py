"""
Typed failures surfaced by the quiz services.

Each error carries a ``message_key`` the presentation layer can localize and
a default (Japanese) message used when it does not.
"""
from typing import Any, Dict, Optional

MESSAGES: Dict[str, str] = {
    "missing_title_or_questions": "章タイトルと1問以上の問題を入力してください。",
    "invalid_question": "問題文・選択肢・正解をすべて正しく入力してください。",
    "chapter_create_failed": "章の登録に失敗しました。",
    "chapter_not_found": "Chapter not found",
    "score_save_failed": "スコアの登録に失敗しました。",
    "missing_credentials": "ユーザーIDとパスワードを入力してください。",
    "invalid_credentials": "ユーザーIDまたはパスワードが違います。",
    "not_authenticated": "ログインしてください。",
    "internal_error": "Internal Server Error",
}


class QuizError(Exception):
    """Base class for errors reported to the caller."""

    status_code = 500
    error_type = "internal_error"

    def __init__(self, message_key: str, **context: Any):
        self.message_key = message_key
        self.message = MESSAGES.get(message_key, message_key)
        self.context = context
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "message": self.message,
            "message_key": self.message_key,
            "type": self.error_type,
            "status_code": self.status_code,
        }


class ValidationError(QuizError):
    """Malformed or incomplete input. The entered values are kept for re-display."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message_key: str, values: Optional[Dict[str, Any]] = None, question_index: Optional[int] = None):
        super().__init__(message_key)
        self.values = values or {}
        self.question_index = question_index

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["values"] = self.values
        if self.question_index is not None:
            data["question_index"] = self.question_index
        return data


class NotFoundError(QuizError):
    status_code = 404
    error_type = "not_found"


class PersistenceError(QuizError):
    """Storage or transaction failure. Details go to the log, never to the caller."""

    status_code = 500
    error_type = "persistence_error"


class AuthenticationError(QuizError):
    status_code = 401
    error_type = "authentication_error"
