from starlette.datastructures import FormData

from chapterquiz.api.forms import answers_from_form, chapter_from_form, field_list


def chapter_form(**fields):
    items = []
    for name, value in fields.items():
        values = value if isinstance(value, list) else [value]
        items.extend((name, v) for v in values)
    return FormData(items)


def test_single_question_form_becomes_one_draft():
    form = chapter_form(title="Math", description="", questionText="2+2?", optionA="3", optionB="4",
                        optionC="5", optionD="6", correctChoice="B")
    payload = chapter_from_form(form)
    assert payload.title == "Math"
    assert len(payload.questions) == 1
    assert payload.questions[0].options == {"A": "3", "B": "4", "C": "5", "D": "6"}
    assert payload.questions[0].correct_choice == "B"


def test_fields_are_aligned_by_index_and_missing_entries_are_empty():
    form = chapter_form(title="Math", questionText=["q1", "q2"], optionA=["a1", "a2"], optionB=["b1", "b2"],
                        optionC=["c1"], optionD=["d1", "d2"], correctChoice=["A"])
    payload = chapter_from_form(form)
    assert [q.question_text for q in payload.questions] == ["q1", "q2"]
    assert payload.questions[1].options["C"] == ""
    assert payload.questions[1].options["D"] == "d2"
    assert payload.questions[1].correct_choice == ""


def test_single_blank_question_means_no_questions():
    assert chapter_from_form(chapter_form(title="Math", questionText="")).questions == []
    assert field_list(FormData([]), "questionText") == []
    assert field_list(chapter_form(questionText=["", "q2"]), "questionText") == ["", "q2"]


def test_answers_are_read_from_bracketed_fields():
    form = FormData([("answers[12]", "B"), ("answers[7]", "A"), ("answers[x]", "C"), ("other", "D")])
    assert answers_from_form(form) == {12: "B", 7: "A"}
