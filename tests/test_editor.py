from unittest.mock import MagicMock

import pytest

from formsmith.editor import (
    EditorMode,
    FormEditor,
    append_item,
    new_question,
    next_local_id,
    remove_at,
    replace_at,
)
from formsmith.exceptions import ApiError
from formsmith.models.forms import QuestionType


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def notify():
    return MagicMock()


@pytest.fixture
def editor(client, notify):
    return FormEditor(client=client, notify=notify)


class TestListHelpers:
    def test_replace_at_returns_new_list(self):
        items = ["a", "b"]
        result = replace_at(items, 1, "c")
        assert result == ["a", "c"]
        assert items == ["a", "b"]

    def test_append_item(self):
        assert append_item(["a"]) == ["a", ""]

    def test_remove_at(self):
        assert remove_at(["a", "b", "c"], 1) == ["a", "c"]

    def test_out_of_range_is_noop(self):
        assert replace_at(["a"], 5, "x") == ["a"]
        assert remove_at(["a"], 5) == ["a"]


class TestNewQuestion:
    def test_ids_increase(self):
        assert next_local_id() < next_local_id()

    def test_checkbox_defaults(self):
        q = new_question("CheckBox")
        assert q.type == QuestionType.CHECKBOX
        assert q.label == ""
        assert q.image is None
        assert q.options == [""]
        assert q.grid.rows == [""] and q.grid.columns == [""]

    @pytest.mark.parametrize("question_type", ["Text", "Grid"])
    def test_non_checkbox_defaults(self, question_type):
        q = new_question(question_type)
        assert q.options == []
        assert q.grid.rows == [""] and q.grid.columns == [""]

    def test_unknown_type_rejected(self):
        with pytest.raises(ValueError):
            new_question("Slider")


class TestQuestionList:
    def test_order_follows_additions(self, editor):
        a = editor.add_question("Text")
        b = editor.add_question("CheckBox")
        c = editor.add_question("Grid")
        editor.remove_question(b.id)
        assert [q.id for q in editor.questions] == [a.id, c.id]

    def test_remove_unknown_is_noop(self, editor):
        editor.add_question("Text")
        before = list(editor.questions)
        editor.remove_question(-1)
        assert editor.questions == before

    def test_update_replaces_in_place(self, editor):
        a = editor.add_question("Text")
        b = editor.add_question("Text")
        editor.update_question(a.id, a.model_copy(update={"label": "First"}))
        assert [q.label for q in editor.questions] == ["First", ""]
        assert editor.questions[1] is b

    def test_update_unknown_is_noop(self, editor):
        a = editor.add_question("Text")
        editor.update_question(-1, a.model_copy(update={"label": "ghost"}))
        assert editor.questions == [a]

    def test_set_label(self, editor):
        a = editor.add_question("Text")
        editor.set_label(a.id, "Name?")
        assert editor.find_question(a.id).label == "Name?"


class TestNestedEditing:
    def test_options(self, editor):
        q = editor.add_question("CheckBox")
        editor.set_option(q.id, 0, "A")
        editor.add_option(q.id)
        editor.set_option(q.id, 1, "B")
        editor.add_option(q.id)
        editor.remove_option(q.id, 2)
        assert editor.find_question(q.id).options == ["A", "B"]

    def test_grid(self, editor):
        q = editor.add_question("Grid")
        editor.set_grid_row(q.id, 0, "Kitchen")
        editor.add_grid_row(q.id)
        editor.set_grid_row(q.id, 1, "Hall")
        editor.set_grid_column(q.id, 0, "Good")
        editor.add_grid_column(q.id)
        editor.set_grid_column(q.id, 1, "Poor")
        editor.add_grid_column(q.id)
        editor.remove_grid_column(q.id, 2)
        editor.add_grid_row(q.id)
        editor.remove_grid_row(q.id, 2)
        grid = editor.find_question(q.id).grid
        assert grid.rows == ["Kitchen", "Hall"]
        assert grid.columns == ["Good", "Poor"]

    def test_edits_do_not_leak_between_questions(self, editor):
        first = editor.add_question("Grid")
        second = editor.add_question("Grid")
        editor.set_grid_row(first.id, 0, "only mine")
        editor.add_grid_column(first.id)
        assert editor.find_question(second.id).grid.rows == [""]
        assert editor.find_question(second.id).grid.columns == [""]

    def test_previous_snapshot_is_unchanged(self, editor):
        q = editor.add_question("CheckBox")
        before = editor.find_question(q.id)
        editor.set_option(q.id, 0, "A")
        assert before.options == [""]

    def test_unknown_question_is_noop(self, editor):
        q = editor.add_question("CheckBox")
        editor.add_option(-1)
        editor.set_grid_row(-1, 0, "x")
        assert editor.questions == [q]


class TestImages:
    def test_header_image_is_local_uri(self, editor, tmp_path):
        image = tmp_path / "header.png"
        image.write_bytes(b"\x89PNG")
        editor.set_header_image(image)
        assert editor.header_image == image.resolve().as_uri()

    def test_question_image(self, editor, tmp_path):
        q = editor.add_question("Text")
        editor.set_question_image(q.id, tmp_path / "q.png")
        assert editor.find_question(q.id).image.startswith("file://")

    def test_no_file_selected_is_noop(self, editor):
        editor.set_header_image(None)
        assert editor.header_image is None


class TestMode:
    def test_toggle_round_trip_leaves_form_untouched(self, editor):
        editor.set_title("Survey")
        q = editor.add_question("CheckBox")
        editor.set_option(q.id, 0, "A")
        before = editor.snapshot().model_dump()
        assert editor.toggle_mode() == EditorMode.PREVIEWING
        editor.render_preview()
        assert editor.toggle_mode() == EditorMode.EDITING
        assert editor.snapshot().model_dump() == before

    def test_enter_and_exit(self, editor):
        editor.enter_preview()
        assert editor.mode == EditorMode.PREVIEWING
        editor.exit_preview()
        assert editor.mode == EditorMode.EDITING

    def test_preview_shows_questions(self, editor):
        editor.set_title("Survey")
        q = editor.add_question("CheckBox")
        editor.set_label(q.id, "Pick one")
        editor.set_option(q.id, 0, "A")
        text = editor.render_preview()
        assert text.splitlines()[0] == "Survey"
        assert "1. Pick one" in text
        assert "[ ] A" in text


class TestSaveForm:
    def test_success_records_id_and_link(self, editor, client, notify):
        client.create_form.return_value = "65f0c0ffee0000000000abcd"
        editor.set_title("Survey")
        assert editor.save_form() is True
        assert editor.form_id == "65f0c0ffee0000000000abcd"
        assert editor.preview_link == "/preview/65f0c0ffee0000000000abcd"
        notify.assert_called_once_with("Form created successfully")
        assert client.create_form.call_args.args[0].title == "Survey"

    def test_failure_leaves_state(self, editor, client, notify):
        client.create_form.side_effect = ApiError("Error creating form", status_code=400)
        editor.set_title("Survey")
        q = editor.add_question("Text")
        assert editor.save_form() is False
        assert editor.form_id is None
        assert editor.preview_link == ""
        assert editor.title == "Survey"
        assert [x.id for x in editor.questions] == [q.id]
        notify.assert_called_once_with("Error creating form")


class TestEndToEnd:
    def test_save_through_api(self, forms_client):
        editor = FormEditor(client=forms_client, notify=MagicMock())
        editor.set_title("Survey")
        q = editor.add_question("CheckBox")
        editor.set_label(q.id, "Pick one")
        editor.set_option(q.id, 0, "A")
        editor.add_option(q.id)
        editor.set_option(q.id, 1, "B")
        assert editor.save_form()
        form = forms_client.get_form(editor.form_id)
        assert form.title == "Survey"
        assert form.questions[0].label == "Pick one"
        assert form.questions[0].options == ["A", "B"]
