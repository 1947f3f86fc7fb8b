"""Rendu HTML de la liste des contenus (page / et vue HTML du controller)"""

from html import escape
from typing import Iterable, Mapping

EMPTY_MESSAGE = 'Nothing here yet, click "Add new content" to get started'
CODE_LANGUAGE = "javascript"  # classe Prism des blocs de code

ACTIONS = (("copy", "Copy"), ("edit", "Edit"), ("delete", "Delete"))


def _paragraphs(text: str) -> str:
    return "".join(f"<p>{escape(line)}</p>" for line in text.split("\n"))


def render_content_body(item: Mapping) -> str:
    content_type = item["type"]
    content = item["content"]
    if content_type == "image":
        return f'<div class="image"><img src="{escape(content)}" alt="{escape(item["title"])}"></div>'
    if content_type == "file":
        return f'<a class="file" href="{escape(content)}" download>{escape(item["title"])}</a>'
    if content_type == "code":
        return f'<pre><code class="language-{CODE_LANGUAGE}">{escape(content)}</code></pre>'
    # text, poetry, prose et types inconnus : une ligne = un paragraphe
    return _paragraphs(content)


def render_actions(content_id: int, content_type: str) -> str:
    """Boutons copier / éditer / supprimer, branchés via data-action et data-id"""
    buttons = "".join(
        f'<button class="btn btn-{action}" data-action="{action}" data-id="{content_id}" '
        f'data-type="{escape(content_type, quote=True)}">{label}</button>'
        for action, label in ACTIONS
    )
    return f'<div class="text-block-actions">{buttons}</div>'


def render_contents(contents: Iterable[Mapping]) -> str:
    contents = list(contents or [])
    if not contents:
        return f'<div class="empty">{escape(EMPTY_MESSAGE)}</div>'

    sections = []
    for item in contents:
        sections.append(
            '<section class="text-block" data-id="{id}">'
            "<h2>{title}</h2>"
            '<div class="{type}">{body}</div>'
            "{actions}"
            "</section>".format(
                id=int(item["id"]),
                actions=render_actions(int(item["id"]), item["type"]),
                title=escape(item["title"]),
                type=escape(item["type"], quote=True),
                body=render_content_body(item),
            )
        )
    return "\n".join(sections)


def render_page(contents: Iterable[Mapping]) -> str:
    return (
        "<!DOCTYPE html>\n"
        '<html><head><meta charset="utf-8"><title>Content Board</title></head>'
        '<body><main id="content-container">'
        f"{render_contents(contents)}"
        "</main></body></html>"
    )
