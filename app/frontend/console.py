"""Vue console du board : affiche la liste dans le terminal"""

import sys
from typing import List, TextIO

from app.frontend.controller import BoardView, EditForm


class ConsoleView(BoardView):

    def __init__(self, out: TextIO = sys.stdout):
        self.out = out

    def _write(self, text: str):
        self.out.write(text + "\n")
        self.out.flush()

    def show_loading(self):
        self._write("Loading...")

    def render(self, contents: List[dict]):
        if not contents:
            self._write('Nothing here yet, use "Add new content" to get started')
            return
        self._write("-" * 60)
        for item in contents:
            self._write(f"[{item['id']}] ({item['type']}) {item['title']}")
            for line in item["content"].split("\n"):
                self._write(f"    {line}")
        self._write("-" * 60)

    def show_error(self, message: str):
        self._write(f"ERROR: {message}")

    def toast(self, message: str, kind: str = "success"):
        prefix = "!" if kind == "error" else "*"
        self._write(f"{prefix} {message}")

    def alert(self, message: str):
        self._write(f"ALERT: {message}")

    def confirm(self, title: str, message: str) -> bool:
        answer = input(f"{title} - {message} [y/N] ")
        return answer.strip().lower() in ("y", "yes")

    def open_modal(self, form: EditForm):
        self._write(f"Editing ({form.type}) {form.title}")
