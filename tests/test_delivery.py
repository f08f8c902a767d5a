import pytest
from sqlalchemy import insert

from chapterquiz.core.errors import NotFoundError
from chapterquiz.models.orm import Chapter, Choice, Question
from chapterquiz.services.authoring import create_chapter
from chapterquiz.services.chapters import list_chapters
from chapterquiz.services.delivery import load_quiz


def test_questions_in_creation_order(db, make_draft):
    chapter_id = create_chapter(db, "alice", "Order", "", [make_draft(f"q{i}") for i in range(1, 6)])
    quiz = load_quiz(db, chapter_id)
    assert [q.question_text for q in quiz.questions] == ["q1", "q2", "q3", "q4", "q5"]
    assert all(len(q.choices) == 4 for q in quiz.questions)


def test_choices_are_sorted_and_grouped_even_if_stored_out_of_order(db):
    db.add(Chapter(id=50, title="Raw", description="", created_by="alice"))
    db.add(Question(id=500, chapter_id=50, question_text="raw?"))
    db.add(Question(id=501, chapter_id=50, question_text="raw 2?"))
    db.flush()
    for qid in (501, 500):
        for key in ("D", "B", "A", "C"):
            db.execute(insert(Choice).values(question_id=qid, choice_key=key, choice_text=f"{qid}{key}", is_correct=key == "A"))
    db.commit()

    quiz = load_quiz(db, 50)
    assert [q.question_id for q in quiz.questions] == [500, 501]
    for q in quiz.questions:
        assert [c.choice_key for c in q.choices] == ["A", "B", "C", "D"]
        assert all(c.choice_text.startswith(str(q.question_id)) for c in q.choices)


def test_other_chapters_do_not_leak(db, make_draft):
    first = create_chapter(db, "alice", "One", "", [make_draft("only in one")])
    second = create_chapter(db, "bob", "Two", "", [make_draft("only in two")])
    assert [q.question_text for q in load_quiz(db, first).questions] == ["only in one"]
    assert [q.question_text for q in load_quiz(db, second).questions] == ["only in two"]


def test_missing_chapter(db):
    with pytest.raises(NotFoundError) as exc_info:
        load_quiz(db, 404)
    assert exc_info.value.message_key == "chapter_not_found"


def test_chapter_list_newest_first(db, make_draft):
    ids = [create_chapter(db, "alice", title, "", [make_draft("q")]) for title in ("a", "b", "c")]
    listed = list_chapters(db)
    # same-second timestamps fall back to id order
    assert [c.id for c in listed] == list(reversed(ids))
    assert listed[0].created_by == "alice"
    assert listed[0].created_at is not None
