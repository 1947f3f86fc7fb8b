"""
BoardController - logique du board côté client

Charge la liste, la rafraîchit toutes les POLL_INTERVAL_SECONDS en silence,
ne re-rend que si le contenu a changé, et pilote le formulaire de
création / édition (avec upload d'image), la suppression et la copie.
L'affichage passe par un BoardView (console, HTML, tests...).
"""

import logging
import shutil
import subprocess
import threading
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import pyperclip

from app.core.config import settings
from app.frontend.api_client import ApiError, ContentApiClient

logger = logging.getLogger(__name__)

NEW_ITEM_TYPE = "prose"  # type par défaut d'un nouveau formulaire


class BoardState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    RENDERED = "rendered"
    EDITING = "editing"
    SAVING = "saving"
    ERROR = "error"


class FormError(Exception):
    pass


class ClipboardError(Exception):
    pass


@dataclass
class ImageUpload:
    filename: str
    data: bytes
    content_type: str = "application/octet-stream"


@dataclass
class EditForm:
    type: str = NEW_ITEM_TYPE
    title: str = ""
    content: str = ""
    image: Optional[ImageUpload] = None
    image_preview: Optional[str] = None
    # champs visibles / obligatoires selon le type
    content_visible: bool = True
    image_visible: bool = False
    content_required: bool = True
    image_required: bool = False


class BoardView:
    """Vue sans effet, à surcharger"""

    def show_loading(self): pass
    def hide_loading(self): pass
    def render(self, contents: List[dict]): pass
    def show_error(self, message: str): pass
    def toast(self, message: str, kind: str = "success"): pass
    def alert(self, message: str): pass
    def confirm(self, title: str, message: str) -> bool: return False
    def open_modal(self, form: EditForm): pass
    def close_modal(self): pass
    def set_submit_enabled(self, enabled: bool): pass


class Clipboard:
    """Presse-papiers : pyperclip en priorité, commande système en secours"""

    # essayées dans l'ordre ; l'entrée est passée sur stdin
    COMMANDS = (
        ("pbcopy",),
        ("wl-copy",),
        ("xclip", "-selection", "clipboard"),
        ("xsel", "--clipboard", "--input"),
        ("clip",),
    )

    def write_text(self, text: str):
        try:
            pyperclip.copy(text)
        except pyperclip.PyperclipException as e:
            raise ClipboardError(str(e)) from e

    def copy_via_command(self, text: str):
        for command in self.COMMANDS:
            if shutil.which(command[0]) is None:
                continue
            try:
                subprocess.run(command, input=text.encode("utf-8"), check=True, timeout=5)
                return
            except (subprocess.SubprocessError, OSError) as e:
                logger.debug(f"{command[0]} failed: {e}")
        raise ClipboardError("No clipboard command available")


def normalize_for_clipboard(text: str, content_type: str) -> str:
    if content_type == "poetry":
        return "\r\n".join(text.split("\n"))
    return text


class BoardController:

    def __init__(self, api: ContentApiClient, view: Optional[BoardView] = None,
                 clipboard: Optional[Clipboard] = None, interval: Optional[float] = None):
        self.api = api
        self.view = view or BoardView()
        self.clipboard = clipboard or Clipboard()
        self.interval = settings.POLL_INTERVAL_SECONDS if interval is None else interval

        self.state = BoardState.IDLE
        self.cache: List[dict] = []
        self._loaded = False
        self.form: Optional[EditForm] = None
        self.current_edit_id: Optional[int] = None

        self._in_flight = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    # ---------- chargement / polling ----------

    def load_contents(self, show_loading: bool = True) -> bool:
        """Charge la liste ; renvoie True si la vue a été re-rendue"""
        with self._in_flight:
            return self._fetch(show_loading)

    def poll(self) -> bool:
        """Un tick de polling ; sauté si un chargement est déjà en cours"""
        if not self._in_flight.acquire(blocking=False):
            logger.debug("Previous load still in flight, tick skipped")
            return False
        try:
            return self._fetch(show_loading=False)
        finally:
            self._in_flight.release()

    def retry(self) -> bool:
        return self.load_contents(show_loading=True)

    def _fetch(self, show_loading: bool) -> bool:
        if show_loading:
            self.state = BoardState.LOADING
            self.view.show_loading()
        try:
            data = self.api.list_contents()
            changed = not self._loaded or data != self.cache
            if changed:
                self.cache = data
                self.view.render(data)
            self._loaded = True
            if self.form is None:
                self.state = BoardState.RENDERED
            return changed
        except ApiError as e:
            logger.error(f"Failed to load contents: {e}")
            if show_loading:
                self.state = BoardState.ERROR
                self.view.show_error(f"Failed to load contents: {e}")
            return False
        finally:
            if show_loading:
                self.view.hide_loading()

    def start(self):
        self.load_contents(show_loading=True)
        self.start_polling()

    def start_polling(self):
        if self._thread and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._poll_loop, name="board-poll", daemon=True)
        self._thread.start()

    def stop_polling(self):
        self._stop.set()
        if self._thread:
            self._thread.join(timeout=self.interval + 1)
            self._thread = None

    def _poll_loop(self):
        while not self._stop.wait(self.interval):
            self.poll()

    # ---------- formulaire ----------

    def _find(self, content_id: int) -> Optional[dict]:
        return next((item for item in self.cache if item["id"] == content_id), None)

    def open_modal(self, content_id: Optional[int] = None) -> Optional[EditForm]:
        if content_id is None:
            self.current_edit_id = None
            form = EditForm()
        else:
            item = self._find(content_id)
            if item is None:
                return None
            self.current_edit_id = item["id"]
            form = EditForm(type=item["type"], title=item["title"], content=item["content"])
            if item["type"] == "image":
                form.image_preview = item["content"]

        self.form = form
        self.change_type(form.type)
        self.state = BoardState.EDITING
        self.view.open_modal(form)
        return form

    def close_modal(self):
        self.form = None
        self.current_edit_id = None
        self.view.close_modal()
        self.state = BoardState.RENDERED

    def change_type(self, content_type: str):
        form = self.form
        if form is None:
            return
        form.type = content_type
        is_image = content_type == "image"
        form.content_visible = not is_image
        form.image_visible = is_image
        form.content_required = not is_image
        form.image_required = is_image

    def choose_image(self, image: ImageUpload):
        if self.form is not None:
            self.form.image = image
            self.form.image_preview = image.filename

    def _resolve_content(self, form: EditForm) -> str:
        if form.type != "image":
            return form.content
        if form.image is not None:
            return self.api.upload_image(form.image.filename, form.image.data, form.image.content_type)
        # édition sans nouvelle image : on garde l'URL existante
        if form.content:
            return form.content
        raise FormError("Please choose an image file")

    def submit(self) -> bool:
        form = self.form
        if form is None:
            return False

        self.state = BoardState.SAVING
        self.view.set_submit_enabled(False)
        try:
            content = self._resolve_content(form)
            data = {"type": form.type, "title": form.title, "content": content}
            if self.current_edit_id is not None:
                self.api.update_content(self.current_edit_id, data)
            else:
                self.api.create_content(data)

            self.close_modal()
            self.load_contents(show_loading=False)
            return True
        except (ApiError, FormError) as e:
            logger.error(f"Save failed: {e}")
            self.state = BoardState.ERROR
            self.view.alert(f"Save failed: {e}")
            self.state = BoardState.EDITING
            return False
        finally:
            self.view.set_submit_enabled(True)

    # ---------- actions sur un contenu ----------

    def delete(self, content_id: int) -> bool:
        confirmed = self.view.confirm(
            "Confirm deletion",
            "Delete this content? This cannot be undone.",
        )
        if not confirmed:
            return False

        try:
            self.api.delete_content(content_id)
        except ApiError as e:
            logger.error(f"Delete failed: {e}")
            self.view.toast(str(e), "error")
            return False

        # pas besoin d'attendre le prochain poll
        with self._in_flight:
            self.cache = [item for item in self.cache if item["id"] != content_id]
            self.view.render(self.cache)
        self.view.toast("Deleted successfully!")
        return True

    def copy(self, content_id: int) -> bool:
        item = self._find(content_id)
        if item is None:
            return False

        text = normalize_for_clipboard(item["content"], item["type"])
        try:
            self.clipboard.write_text(text)
        except ClipboardError:
            try:
                self.clipboard.copy_via_command(text)
            except ClipboardError as e:
                logger.warning(f"Copy failed: {e}")
                self.view.toast("Copy failed, please copy manually", "error")
                return False

        self.view.toast("Copied!")
        return True
