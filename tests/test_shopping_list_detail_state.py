"""
Tests for ShoppingListDetailState: checklist, edit transaction, delete and export.
"""

from unittest.mock import Mock, patch

import pytest

from streamlit_app.utils.api_client import ApiError
from streamlit_app.utils.state import EditableItem, ShoppingListDetailState

CLIENT = "streamlit_app.utils.state.api_client"


def _list_data():
    return {
        "id": 3,
        "name": "Weekend",
        "createdAt": "2024-03-02T09:30:00",
        "recipes": [{"id": 1, "title": "Pancakes"}],
        "items": [
            {"id": 10, "name": "Flour", "quantity": "2", "unit": "cups"},
            {"id": 11, "name": "Salt", "quantity": None, "unit": None},
        ],
    }


@pytest.fixture
def detail():
    state = ShoppingListDetailState(3)
    with patch(f"{CLIENT}.get_shopping_list", return_value=_list_data()):
        state.load()
    return state


class TestLoadAndChecklist:
    def test_load_failure(self):
        state = ShoppingListDetailState(99)

        with patch(f"{CLIENT}.get_shopping_list", side_effect=ApiError("Shopping list not found: 99", 404)):
            state.load()

        assert not state.loaded
        assert state.error == "Shopping list not found: 99"

    def test_checked_items_reset_on_reload(self, detail):
        detail.toggle_checked(10)
        assert detail.is_checked(10)

        with patch(f"{CLIENT}.get_shopping_list", return_value=_list_data()):
            detail.load()

        assert not detail.is_checked(10)

    def test_toggle_twice_unchecks(self, detail):
        detail.toggle_checked(11)
        detail.toggle_checked(11)

        assert detail.checked == set()


class TestEditTransaction:
    """Test cases for the start -> edit -> save/cancel cycle."""

    def test_start_editing_copies_data(self, detail):
        detail.start_editing()

        assert detail.editing is True
        assert detail.edit_name == "Weekend"
        assert detail.edit_items == [
            EditableItem(id=10, name="Flour", quantity="2", unit="cups"),
            EditableItem(id=11, name="Salt", quantity="", unit=""),
        ]

    def test_cancel_leaves_data_unchanged(self, detail):
        detail.start_editing()
        detail.update_item(0, "name", "Bread flour")
        detail.remove_item(1)
        detail.action_error = "previous failure"

        detail.cancel_editing()

        assert detail.editing is False
        assert detail.edit_items == []
        assert detail.action_error is None
        assert detail.data == _list_data()

    def test_payload_mixes_existing_and_new_rows(self, detail):
        detail.start_editing()
        detail.edit_name = "Weekend v2"
        detail.update_item(0, "quantity", "3")
        detail.remove_item(1)
        detail.add_item()
        detail.update_item(1, "name", "Lemons")
        detail.update_item(1, "quantity", "2")

        name, items = detail.build_payload()

        assert name == "Weekend v2"
        assert items == [
            {"id": 10, "name": "Flour", "quantity": "3", "unit": "cups"},
            {"id": None, "name": "Lemons", "quantity": "2", "unit": None},
        ]

    def test_whitespace_quantity_and_unit_are_sent_as_none(self, detail):
        detail.start_editing()
        detail.update_item(0, "quantity", "   ")
        detail.update_item(0, "unit", "")

        _, items = detail.build_payload()

        assert items[0] == {"id": 10, "name": "Flour", "quantity": None, "unit": None}

    def test_update_item_rejects_unknown_field(self, detail):
        detail.start_editing()

        with pytest.raises(ValueError, match="Unknown item field: id"):
            detail.update_item(0, "id", "5")

    def test_save_success_replaces_data(self, detail):
        detail.start_editing()
        detail.edit_name = "Renamed"
        updated = dict(_list_data(), name="Renamed")

        with patch(f"{CLIENT}.update_shopping_list", return_value=updated) as update:
            assert detail.save() is True

        update.assert_called_once()
        assert update.call_args.args[0] == 3
        assert update.call_args.args[1] == "Renamed"
        assert detail.data == updated
        assert detail.editing is False
        assert detail.saving is False

    def test_save_failure_keeps_buffer(self, detail):
        detail.start_editing()
        detail.update_item(1, "name", "")

        with patch(f"{CLIENT}.update_shopping_list", side_effect=ApiError("items.1.name: must not be blank", 400)):
            assert detail.save() is False

        assert detail.editing is True
        assert detail.saving is False
        assert detail.edit_items[1].name == ""
        assert detail.action_error == "items.1.name: must not be blank"
        assert detail.data == _list_data()


class TestDeleteAndExport:
    def test_delete_calls_back_on_success(self, detail):
        on_deleted = Mock()

        with patch(f"{CLIENT}.delete_shopping_list") as delete:
            assert detail.delete(on_deleted=on_deleted) is True

        delete.assert_called_once_with(3)
        on_deleted.assert_called_once()

    def test_delete_failure(self, detail):
        on_deleted = Mock()

        with patch(f"{CLIENT}.delete_shopping_list", side_effect=ApiError("Request failed: 500", 500)):
            assert detail.delete(on_deleted=on_deleted) is False

        on_deleted.assert_not_called()
        assert detail.action_error == "Request failed: 500"

    def test_export_uses_loaded_data_not_buffer(self, detail):
        detail.start_editing()
        detail.update_item(0, "name", "Unsaved")

        assert detail.export_text() == "2 cups Flour\nSalt"
        assert "<title>Weekend</title>" in detail.export_document()

    def test_export_requires_loaded_list(self):
        state = ShoppingListDetailState(3)

        with pytest.raises(RuntimeError):
            state.export_text()
        with pytest.raises(RuntimeError):
            state.export_document()

    def test_record_export_logs_format(self, detail):
        with patch("streamlit_app.utils.state.log_shopping_list_exported") as log_exported:
            detail.record_export("session-1", "txt")
            detail.record_export("session-1")

        assert [c.args for c in log_exported.call_args_list] == [
            ("session-1", 3, 2, "txt"),
            ("session-1", 3, 2, "html"),
        ]

    def test_record_export_skips_unloaded_list(self):
        state = ShoppingListDetailState(3)

        with patch("streamlit_app.utils.state.log_shopping_list_exported") as log_exported:
            state.record_export("session-1", "txt")

        log_exported.assert_not_called()
