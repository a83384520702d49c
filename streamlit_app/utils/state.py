"""
View State Module.

Each page keeps one controller object from this module in st.session_state
(see utils.session.get_view_state). Controllers hold the page's data, its
selection/edit state and its error messages, and they perform backend calls
through utils.api_client. Pages only render controller state and forward
user actions to controller methods, which keeps everything here testable
without a running Streamlit app.

Conventions shared by all controllers:
- Local state is changed only after the backend call succeeded.
- Failures are reduced to one message string. `error` holds load failures
  (a page may render nothing else); `action_error` holds failures of
  delete/save/create actions, shown next to otherwise normal content.
- Nothing is retried; the user repeats the action.
- Callbacks such as on_added/on_created let the page bump refresh counters.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Set, Tuple

from sniper.events import log_shopping_list_exported
from streamlit_app.utils import api_client
from streamlit_app.utils.api_client import ApiError
from streamlit_app.utils.export import build_export_html, build_export_text

logger = logging.getLogger(__name__)

DEFAULT_LIST_NAME = "Shopping List"

Callback = Optional[Callable[[], None]]


def _notify(callback: Callback) -> None:
    if callback is not None:
        callback()


class AddRecipeState:
    """
    Add-Recipe form: idle -> submitting -> success (result) or error.

    The result panel of the last success stays visible until the next submit.
    """

    def __init__(self):
        self.url: str = ""
        self.submitting: bool = False
        self.error: Optional[str] = None
        self.result: Optional[Dict[str, Any]] = None

    def submit(self, on_added: Callback = None) -> bool:
        """
        Scrape the current URL.

        On success the URL is cleared and on_added is called; on failure the
        URL is kept and error is set.

        Returns:
            True on success
        """
        self.submitting = True
        self.error = None
        self.result = None
        try:
            recipe = api_client.add_recipe(self.url)
        except ApiError as e:
            self.error = str(e) or "Failed to add recipe"
            return False
        finally:
            self.submitting = False

        self.result = recipe
        self.url = ""
        _notify(on_added)
        return True


class RecipeListState:
    """Recipe list with search, multi-select, delete and list building."""

    def __init__(self):
        self.recipes: List[Dict[str, Any]] = []
        self.loaded: bool = False
        self.error: Optional[str] = None
        self.action_error: Optional[str] = None
        self.selected: Set[int] = set()
        self.search: str = ""
        self.list_name: str = ""
        self.existing_lists: List[Dict[str, Any]] = []
        self.target_list_id: Optional[int] = None
        self.refresh_seen: Optional[int] = None

    def sync(self, refresh_counter: int, entered: bool = False) -> None:
        """Re-fetch when the page was just entered or the refresh counter moved."""
        if entered or refresh_counter != self.refresh_seen:
            self.refresh_seen = refresh_counter
            self.load()
            self.load_existing_lists()

    def load(self, search: Optional[str] = None) -> None:
        """Fetch recipes, filtered by title when search is given."""
        try:
            self.recipes = api_client.get_all_recipes(search)
            self.error = None
        except ApiError as e:
            self.error = str(e)
        self.loaded = True

    def load_existing_lists(self) -> None:
        """Fetch shopping lists for the "add to existing" picker. Failures leave it empty."""
        try:
            self.existing_lists = api_client.get_all_shopping_lists()
        except ApiError as e:
            logger.warning(f"Could not load shopping lists for picker: {e}")
            self.existing_lists = []
        known = {shopping_list["id"] for shopping_list in self.existing_lists}
        if self.target_list_id not in known:
            self.target_list_id = None

    def submit_search(self) -> None:
        self.load(self.search.strip() or None)

    def clear_search(self) -> None:
        self.search = ""
        self.load()

    def toggle(self, recipe_id: int) -> None:
        if recipe_id in self.selected:
            self.selected.discard(recipe_id)
        else:
            self.selected.add(recipe_id)

    def is_selected(self, recipe_id: int) -> bool:
        return recipe_id in self.selected

    def delete(self, recipe_id: int) -> bool:
        """
        Delete a recipe, then drop it from the collection and the selection.

        Returns:
            True on success; on failure state is unchanged and action_error is set
        """
        try:
            api_client.delete_recipe(recipe_id)
        except ApiError as e:
            self.action_error = str(e)
            return False

        self.action_error = None
        self.recipes = [recipe for recipe in self.recipes if recipe["id"] != recipe_id]
        self.selected.discard(recipe_id)
        return True

    def create_list(self, on_created: Callback = None) -> Optional[Dict[str, Any]]:
        """
        Create a shopping list from the selection.

        A blank name becomes "Shopping List". On success the selection and
        the name are cleared and on_created is called.

        Returns:
            The new list detail, or None if nothing is selected or the call failed
        """
        if not self.selected:
            return None
        name = self.list_name.strip() or DEFAULT_LIST_NAME
        try:
            created = api_client.create_shopping_list(name, sorted(self.selected))
        except ApiError as e:
            self.action_error = str(e)
            return None

        self.action_error = None
        self.selected.clear()
        self.list_name = ""
        _notify(on_created)
        return created

    def add_to_existing(self, on_added: Callback = None) -> Optional[Dict[str, Any]]:
        """
        Append the selection to the chosen target list.

        Returns:
            The updated list detail, or None without selection/target or on failure
        """
        if not self.selected or self.target_list_id is None:
            return None
        try:
            updated = api_client.add_recipes_to_shopping_list(self.target_list_id, sorted(self.selected))
        except ApiError as e:
            self.action_error = str(e)
            return None

        self.action_error = None
        self.selected.clear()
        _notify(on_added)
        return updated


class ShoppingListsState:
    """Shopping list overview plus the id of the list opened in detail view."""

    def __init__(self):
        self.lists: List[Dict[str, Any]] = []
        self.loaded: bool = False
        self.error: Optional[str] = None
        self.action_error: Optional[str] = None
        self.selected_list_id: Optional[int] = None
        self.refresh_seen: Optional[int] = None

    def sync(self, refresh_counter: int, entered: bool = False) -> None:
        if entered or refresh_counter != self.refresh_seen:
            self.refresh_seen = refresh_counter
            self.load()

    def load(self) -> None:
        try:
            self.lists = api_client.get_all_shopping_lists()
            self.error = None
        except ApiError as e:
            self.error = str(e)
        self.loaded = True

    def delete(self, list_id: int) -> bool:
        """Delete a list, then drop it locally. Returns True on success."""
        try:
            api_client.delete_shopping_list(list_id)
        except ApiError as e:
            self.action_error = str(e)
            return False

        self.action_error = None
        self.lists = [shopping_list for shopping_list in self.lists if shopping_list["id"] != list_id]
        if self.selected_list_id == list_id:
            self.selected_list_id = None
        return True

    def open(self, list_id: int) -> None:
        self.selected_list_id = list_id

    def close(self) -> None:
        """Leave the detail view; the overview is re-fetched."""
        self.selected_list_id = None
        self.load()


@dataclass
class EditableItem:
    """
    One row of the edit buffer.

    id is None for rows added in the editor. Text fields are plain strings;
    absent values are edited as "".
    """
    id: Optional[int]
    name: str = ""
    quantity: str = ""
    unit: str = ""

    FIELDS = ("name", "quantity", "unit")

    @classmethod
    def from_item(cls, item: Dict[str, Any]) -> "EditableItem":
        return cls(
            id=item.get("id"),
            name=item.get("name") or "",
            quantity=item.get("quantity") or "",
            unit=item.get("unit") or "",
        )

    def to_payload(self) -> Dict[str, Any]:
        """Request row for the update call; blank or whitespace-only quantity/unit become None."""
        return {
            "id": self.id,
            "name": self.name,
            "quantity": self.quantity if self.quantity.strip() else None,
            "unit": self.unit if self.unit.strip() else None,
        }


class ShoppingListDetailState:
    """
    One shopping list: loading -> viewing <-> editing -> saving -> viewing.

    Checked items are local to this controller and reset on every load.
    """

    def __init__(self, list_id: int):
        self.list_id = list_id
        self.data: Optional[Dict[str, Any]] = None
        self.error: Optional[str] = None
        self.action_error: Optional[str] = None
        self.checked: Set[int] = set()
        self.editing: bool = False
        self.saving: bool = False
        self.edit_name: str = ""
        self.edit_items: List[EditableItem] = []

    @property
    def loaded(self) -> bool:
        return self.data is not None

    def load(self) -> None:
        """Fetch the list. A failure sets error and leaves data unset."""
        try:
            self.data = api_client.get_shopping_list(self.list_id)
            self.error = None
        except ApiError as e:
            self.data = None
            self.error = str(e)
        self.checked = set()

    # -- checklist ---------------------------------------------------------

    def toggle_checked(self, item_id: int) -> None:
        if item_id in self.checked:
            self.checked.discard(item_id)
        else:
            self.checked.add(item_id)

    def is_checked(self, item_id: int) -> bool:
        return item_id in self.checked

    # -- edit transaction --------------------------------------------------

    def start_editing(self) -> None:
        """Copy the loaded name and items into the edit buffer."""
        if self.data is None:
            return
        self.edit_name = self.data["name"]
        self.edit_items = [EditableItem.from_item(item) for item in self.data.get("items") or []]
        self.action_error = None
        self.editing = True

    def cancel_editing(self) -> None:
        """Discard the edit buffer and any error."""
        self.editing = False
        self.edit_name = ""
        self.edit_items = []
        self.action_error = None

    def update_item(self, index: int, field: str, value: str) -> None:
        """
        Set one field of one buffer row.

        Raises:
            ValueError: If field is not name, quantity or unit
            IndexError: If index is out of range
        """
        if field not in EditableItem.FIELDS:
            raise ValueError(f"Unknown item field: {field}")
        setattr(self.edit_items[index], field, value)

    def add_item(self) -> None:
        self.edit_items.append(EditableItem(id=None))

    def remove_item(self, index: int) -> None:
        del self.edit_items[index]

    def build_payload(self) -> Tuple[str, List[Dict[str, Any]]]:
        """Name and item rows exactly as sent by save()."""
        return self.edit_name, [item.to_payload() for item in self.edit_items]

    def save(self) -> bool:
        """
        Send the edit buffer as one replace-all update.

        On success the returned list replaces data and edit mode ends; on
        failure the buffer is kept and action_error is set.

        Returns:
            True on success
        """
        name, items = self.build_payload()
        self.saving = True
        self.action_error = None
        try:
            updated = api_client.update_shopping_list(self.list_id, name, items)
        except ApiError as e:
            self.action_error = str(e)
            return False
        finally:
            self.saving = False

        self.data = updated
        self.editing = False
        self.edit_name = ""
        self.edit_items = []
        return True

    # -- delete / export ---------------------------------------------------

    def delete(self, on_deleted: Callback = None) -> bool:
        """Delete the whole list, then call on_deleted. Returns True on success."""
        try:
            api_client.delete_shopping_list(self.list_id)
        except ApiError as e:
            self.action_error = str(e)
            return False
        _notify(on_deleted)
        return True

    def export_text(self) -> str:
        """
        Raises:
            RuntimeError: If the list is not loaded
        """
        if self.data is None:
            raise RuntimeError("Shopping list is not loaded")
        return build_export_text(self.data.get("items") or [])

    def export_document(self) -> str:
        """
        Printable HTML page of the loaded list (never the edit buffer).

        Raises:
            RuntimeError: If the list is not loaded
        """
        if self.data is None:
            raise RuntimeError("Shopping list is not loaded")
        return build_export_html(self.data)

    def record_export(self, session_id: Optional[str], export_format: str = "html") -> None:
        """
        Log a shopping_list_exported event for the loaded list.

        Args:
            session_id: Streamlit session id
            export_format: "html" (new tab) or "txt" (download)
        """
        if self.data is None:
            return
        log_shopping_list_exported(session_id, self.list_id, len(self.data.get("items") or []), export_format)
