from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model that speaks camelCase on the wire and accepts either spelling."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# Free text where a null from the client is stored as an empty string.
NullableStr = Annotated[str, BeforeValidator(lambda value: "" if value is None else value)]


class QuestionType(str, Enum):
    TEXT = "Text"
    CHECKBOX = "CheckBox"
    GRID = "Grid"


class Grid(CamelModel):
    rows: list[str] = Field(default_factory=list)
    columns: list[str] = Field(default_factory=list)


class Question(CamelModel):
    id: int | str | None = None  # client-minted before save, store-assigned after
    type: QuestionType
    label: NullableStr = ""
    image: str | None = None
    options: list[str] = Field(default_factory=list)
    grid: Grid = Field(default_factory=Grid)

    def active_choices(self) -> list[str] | Grid | None:
        """Return the sub-structure that ``type`` makes meaningful."""
        if self.type == QuestionType.CHECKBOX:
            return self.options
        if self.type == QuestionType.GRID:
            return self.grid
        return None


class Form(CamelModel):
    id: str | None = None
    title: NullableStr = ""
    header_image: str | None = None
    questions: list[Question] = Field(default_factory=list)


class ResponseEntry(CamelModel):
    question_id: Any = None
    answer: Any = None  # bool for CheckBox, str for Text/Grid


class FormResponse(CamelModel):
    id: str | None = None
    form_id: Any = None  # stored as given; not a checked reference
    responses: list[ResponseEntry] = Field(default_factory=list)


class CreateFormRequest(CamelModel):
    title: NullableStr = ""
    header_image: str | None = None
    questions: list[Question] = Field(default_factory=list)


class CreateFormResult(CamelModel):
    message: str
    form_id: str


class SubmitResponseRequest(CamelModel):
    form_id: Any = None
    responses: list[ResponseEntry] = Field(default_factory=list)
