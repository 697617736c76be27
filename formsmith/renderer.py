"""Read-only rendering of a saved form and collection of a respondent's answers."""

import logging
from typing import Any, Callable

from formsmith.client import FormsClient
from formsmith.exceptions import FormsmithError
from formsmith.models.forms import Form, Grid, Question, ResponseEntry

logger = logging.getLogger(__name__)

LOADING_PLACEHOLDER = "Loading..."


def _render_grid(grid: Grid) -> list[str]:
    columns = grid.columns
    width = max([len(c) for c in columns + grid.rows] + [3])
    lines = ["   " + " | ".join([" " * width] + [c.ljust(width) for c in columns])]
    for row in grid.rows:
        cells = ["_" * width for _ in columns]
        lines.append("   " + " | ".join([row.ljust(width)] + cells))
    return lines


def render_question(question: Question, answer: Any = None) -> list[str]:
    lines = [question.label]
    if question.image:
        lines.append(f"   [image: {question.image}]")
    choices = question.active_choices()
    if isinstance(choices, Grid):
        lines.extend(_render_grid(choices))
    elif choices is not None:
        lines.extend(f"   [ ] {option}" for option in choices)
    if answer is not None:
        lines.append(f"   answer: {answer!r}")
    return lines


def render_form(form: Form, answers: dict | None = None) -> str:
    """Render a form as plain text, one block per question in display order."""
    answers = answers or {}
    lines = [form.title]
    if form.header_image:
        lines.append(f"[header image: {form.header_image}]")
    for number, question in enumerate(form.questions, start=1):
        block = render_question(question, answers.get(question.id))
        lines.append("")
        lines.append(f"{number}. {block[0]}")
        lines.extend(block[1:])
    return "\n".join(lines)


class FormRenderer:
    """Answerable view of a saved form.

    The form is fetched once by ``load``. Answers are kept in a map keyed by
    question id; every interaction overwrites the previous value for that id,
    so a Grid question only keeps its most recently edited cell.
    """

    def __init__(self, form_id: str, client: FormsClient | None = None,
                 notify: Callable[[str], None] | None = None):
        self.form_id = form_id
        self.client = client if client is not None else FormsClient()
        self.notify = notify or logger.info
        self.form: Form | None = None
        self.answers: dict = {}
        self._fetched = False

    @property
    def is_loading(self) -> bool:
        return self.form is None

    def load(self) -> Form | None:
        # A failed fetch leaves the renderer loading; it is not retried.
        if self._fetched:
            return self.form
        self._fetched = True
        try:
            self.form = self.client.get_form(self.form_id)
        except FormsmithError as e:
            logger.error("Error fetching form %s: %s", self.form_id, e.message)
        return self.form

    def set_answer(self, question_id, value) -> None:
        self.answers = {**self.answers, question_id: value}

    def toggle_checkbox(self, question_id, checked: bool) -> None:
        self.set_answer(question_id, checked)

    def set_grid_cell(self, question_id, row: int, column: int, value: str) -> None:
        self.set_answer(question_id, value)

    def set_text(self, question_id, value: str) -> None:
        self.set_answer(question_id, value)

    def collect_responses(self) -> list[ResponseEntry]:
        return [ResponseEntry(question_id=qid, answer=answer) for qid, answer in self.answers.items()]

    def submit_form(self) -> bool:
        """Send the collected answers. The answers are kept, so submitting again
        creates another response."""
        try:
            self.client.submit_response(self.form_id, self.collect_responses())
        except FormsmithError as e:
            logger.error("Error submitting form %s: %s", self.form_id, e.message)
            self.notify("Error submitting form")
            return False
        self.notify("Form submitted successfully")
        return True

    def render(self) -> str:
        if self.form is None:
            return LOADING_PLACEHOLDER
        return render_form(self.form, self.answers)
