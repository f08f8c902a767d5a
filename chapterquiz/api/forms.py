"""
Request-body normalization.

HTML forms repeat a field once per question, so a one-question form carries
a single value where a longer one carries several. Everything is turned into
explicit ordered lists here before it reaches the services.
"""
import re
from typing import Dict, List, Tuple
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError as PydanticValidationError
from starlette.datastructures import FormData
from chapterquiz.models.orm import CHOICE_KEYS
from chapterquiz.models.schemas import ChapterCreate, QuestionDraft, QuizSubmit

ANSWER_FIELD = re.compile(r"^answers\[(\d+)\]$")

def field_list(form: FormData, name: str) -> List[str]:
    values = [v for v in form.getlist(name) if isinstance(v, str)]
    if len(values) == 1 and not values[0]:
        return []
    return values

def _at(values: List[str], index: int) -> str:
    return values[index] if index < len(values) else ""

def chapter_from_form(form: FormData) -> ChapterCreate:
    texts = field_list(form, "questionText")
    options = {key: field_list(form, f"option{key}") for key in CHOICE_KEYS}
    answers = field_list(form, "correctChoice")
    drafts = [
        QuestionDraft(
            question_text=text,
            options={key: _at(options[key], i) for key in CHOICE_KEYS},
            correct_choice=_at(answers, i),
        )
        for i, text in enumerate(texts)
    ]
    title = form.get("title")
    description = form.get("description")
    return ChapterCreate(
        title=title if isinstance(title, str) else "",
        description=description if isinstance(description, str) else "",
        questions=drafts,
    )

def answers_from_form(form: FormData) -> Dict[int, str]:
    answers: Dict[int, str] = {}
    for name, value in form.multi_items():
        match = ANSWER_FIELD.match(name)
        if match and isinstance(value, str):
            answers[int(match.group(1))] = value
    return answers

def _is_json(request: Request) -> bool:
    return request.headers.get("content-type", "").split(";")[0].strip() == "application/json"

async def _json_body(request: Request):
    try:
        return await request.json()
    except ValueError as exc:
        raise RequestValidationError([{"type": "json_invalid", "loc": ("body",), "msg": "Invalid JSON"}]) from exc

async def submitted_answers(request: Request) -> Dict[int, str]:
    """Answers from a JSON ``{"answers": {...}}`` body or ``answers[<id>]`` form fields."""
    if _is_json(request):
        try:
            return QuizSubmit.model_validate(await _json_body(request)).answers
        except PydanticValidationError as exc:
            raise RequestValidationError(exc.errors()) from exc
    return answers_from_form(await request.form())

async def submitted_chapter(request: Request) -> ChapterCreate:
    return chapter_from_form(await request.form())

async def submitted_credentials(request: Request) -> Tuple[str, str]:
    if _is_json(request):
        body = await _json_body(request)
        data = body if isinstance(body, dict) else {}
    else:
        data = await request.form()
    userid, password = data.get("userid"), data.get("password")
    return (userid if isinstance(userid, str) else "", password if isinstance(password, str) else "")
