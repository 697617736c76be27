"""In-memory editing state for a form that has not been saved yet."""

import logging
import time
from enum import Enum
from pathlib import Path
from typing import Callable, Sequence

from formsmith.client import FormsClient
from formsmith.exceptions import FormsmithError
from formsmith.models.forms import CreateFormRequest, Form, Grid, Question, QuestionType
from formsmith.renderer import render_form

logger = logging.getLogger(__name__)

_last_local_id = 0


def next_local_id() -> int:
    """Millisecond timestamp, bumped so ids never repeat within a process."""
    global _last_local_id
    _last_local_id = max(_last_local_id + 1, int(time.time() * 1000))
    return _last_local_id


# --- List helpers; each returns a new list ---

def replace_at(items: Sequence[str], index: int, value: str) -> list[str]:
    return [value if i == index else item for i, item in enumerate(items)]


def append_item(items: Sequence[str], value: str = "") -> list[str]:
    return [*items, value]


def remove_at(items: Sequence[str], index: int) -> list[str]:
    return [item for i, item in enumerate(items) if i != index]


def new_question(question_type: QuestionType | str) -> Question:
    question_type = QuestionType(question_type)
    return Question(
        id=next_local_id(),
        type=question_type,
        label="",
        image=None,
        options=[""] if question_type == QuestionType.CHECKBOX else [],
        grid=Grid(rows=[""], columns=[""]),
    )


def _local_image_ref(path) -> str:
    return Path(path).resolve().as_uri()


class EditorMode(str, Enum):
    EDITING = "editing"
    PREVIEWING = "previewing"


class FormEditor:
    """Form under construction, owned by one user until it is saved.

    Image references are local file URIs; they are never uploaded, so a form
    loaded back from the server still carries the URI but not the image.
    """

    def __init__(self, client: FormsClient | None = None, notify: Callable[[str], None] | None = None):
        self.client = client if client is not None else FormsClient()
        self.notify = notify or logger.info
        self.title = ""
        self.header_image: str | None = None
        self.questions: list[Question] = []
        self.mode = EditorMode.EDITING
        self.form_id: str | None = None
        self.preview_link = ""

    # --- Form-level fields ---

    def set_title(self, title: str) -> None:
        self.title = title

    def set_header_image(self, path) -> None:
        if path:
            self.header_image = _local_image_ref(path)

    # --- Questions ---

    def find_question(self, question_id) -> Question | None:
        return next((q for q in self.questions if q.id == question_id), None)

    def add_question(self, question_type: QuestionType | str) -> Question:
        question = new_question(question_type)
        self.questions = [*self.questions, question]
        return question

    def update_question(self, question_id, updated: Question) -> None:
        # Unknown ids are ignored.
        self.questions = [updated if q.id == question_id else q for q in self.questions]

    def remove_question(self, question_id) -> None:
        self.questions = [q for q in self.questions if q.id != question_id]

    def _edit(self, question_id, **changes) -> None:
        question = self.find_question(question_id)
        if question is None:
            return
        self.update_question(question_id, question.model_copy(update=changes))

    def _edit_grid(self, question_id, axis: str, edit: Callable[[list[str]], list[str]]) -> None:
        question = self.find_question(question_id)
        if question is None:
            return
        grid = question.grid.model_copy(update={axis: edit(getattr(question.grid, axis))})
        self.update_question(question_id, question.model_copy(update={"grid": grid}))

    def set_label(self, question_id, label: str) -> None:
        self._edit(question_id, label=label)

    def set_question_image(self, question_id, path) -> None:
        if path:
            self._edit(question_id, image=_local_image_ref(path))

    # --- CheckBox options ---

    def set_option(self, question_id, index: int, value: str) -> None:
        question = self.find_question(question_id)
        if question is not None:
            self._edit(question_id, options=replace_at(question.options, index, value))

    def add_option(self, question_id) -> None:
        question = self.find_question(question_id)
        if question is not None:
            self._edit(question_id, options=append_item(question.options))

    def remove_option(self, question_id, index: int) -> None:
        question = self.find_question(question_id)
        if question is not None:
            self._edit(question_id, options=remove_at(question.options, index))

    # --- Grid rows and columns ---

    def set_grid_row(self, question_id, index: int, value: str) -> None:
        self._edit_grid(question_id, "rows", lambda rows: replace_at(rows, index, value))

    def add_grid_row(self, question_id) -> None:
        self._edit_grid(question_id, "rows", append_item)

    def remove_grid_row(self, question_id, index: int) -> None:
        self._edit_grid(question_id, "rows", lambda rows: remove_at(rows, index))

    def set_grid_column(self, question_id, index: int, value: str) -> None:
        self._edit_grid(question_id, "columns", lambda columns: replace_at(columns, index, value))

    def add_grid_column(self, question_id) -> None:
        self._edit_grid(question_id, "columns", append_item)

    def remove_grid_column(self, question_id, index: int) -> None:
        self._edit_grid(question_id, "columns", lambda columns: remove_at(columns, index))

    # --- Mode ---

    def enter_preview(self) -> None:
        self.mode = EditorMode.PREVIEWING

    def exit_preview(self) -> None:
        self.mode = EditorMode.EDITING

    def toggle_mode(self) -> EditorMode:
        if self.mode == EditorMode.EDITING:
            self.enter_preview()
        else:
            self.exit_preview()
        return self.mode

    def render_preview(self) -> str:
        return render_form(Form(title=self.title, header_image=self.header_image, questions=self.questions))

    # --- Saving ---

    def snapshot(self) -> CreateFormRequest:
        return CreateFormRequest(title=self.title, header_image=self.header_image, questions=list(self.questions))

    def save_form(self) -> bool:
        """Create the form on the server. Editor state is untouched on failure."""
        try:
            form_id = self.client.create_form(self.snapshot())
        except FormsmithError as e:
            logger.error("Error saving form: %s (%s)", e.message, e.error)
            self.notify("Error creating form")
            return False
        self.form_id = form_id
        self.preview_link = f"/preview/{form_id}"
        self.notify("Form created successfully")
        return True
