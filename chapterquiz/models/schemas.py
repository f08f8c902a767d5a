from datetime import datetime
from typing import Dict, List
from pydantic import BaseModel, ConfigDict, Field

class QuestionDraft(BaseModel):
    question_text: str = ""
    options: Dict[str, str] = Field(default_factory=dict)
    correct_choice: str = ""

class ChapterCreate(BaseModel):
    title: str = ""
    description: str = ""
    questions: List[QuestionDraft] = Field(default_factory=list)

class ChapterCreated(BaseModel):
    chapter_id: int

class ChapterSummary(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    title: str
    description: str | None = None
    created_by: str | None = None
    created_at: datetime | None = None

class ChapterRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    title: str

class ChoiceOut(BaseModel):
    choice_key: str
    choice_text: str

class QuizQuestion(BaseModel):
    question_id: int
    question_text: str
    choices: List[ChoiceOut] = Field(default_factory=list)

class QuizOut(BaseModel):
    chapter: ChapterRef
    questions: List[QuizQuestion]

class QuizSubmit(BaseModel):
    answers: Dict[int, str] = Field(default_factory=dict)

class RankingEntry(BaseModel):
    userid: str
    display_name: str
    correct_count: int
    updated_at: datetime

class RankingOut(BaseModel):
    chapter: ChapterRef
    rankings: List[RankingEntry]
