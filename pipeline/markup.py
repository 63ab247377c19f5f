"""
Host reader and renderers for assignment documents.

Source is parsed with markdown-it (CommonMark) plus the `colon_fence` and
`myst_role` plugins, so `{name}`body`` roles and `:::{name}` ... `:::`
directives are recognised by the Markdown grammar itself. Roles and directives
are resolved through callables supplied by the extension.
"""
import re
from typing import Callable, Mapping

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode
from mdit_py_plugins.colon_fence import colon_fence_plugin
from mdit_py_plugins.myst_role import myst_role_plugin

from core.diagnostics import DiagnosticsCollector
from core.schema import (
    CodeBlock,
    DiagnosticKind,
    Emphasis,
    Heading,
    InlineCode,
    ListBlock,
    ListItem,
    Node,
    Paragraph,
    PointAnnotation,
    ReportPlaceholder,
    Root,
    Strong,
    Text,
)

RoleHandler = Callable[[str], list]
DirectiveHandler = Callable[[str], list]

DIRECTIVE_INFO = re.compile(r"^\{(?P<name>[\w-]+)\}\s*(?P<arg>.*)$")

INLINE_TYPES = (Text, InlineCode, Strong, Emphasis, PointAnnotation)

_MARKDOWN_PARSER: MarkdownIt | None = None


def _markdown_parser() -> MarkdownIt:
    global _MARKDOWN_PARSER
    if _MARKDOWN_PARSER is None:
        _MARKDOWN_PARSER = MarkdownIt("commonmark").use(colon_fence_plugin).use(myst_role_plugin)
    return _MARKDOWN_PARSER


def _merge_text(nodes: list[Node]) -> list[Node]:
    merged: list[Node] = []
    for node in nodes:
        if isinstance(node, Text) and merged and isinstance(merged[-1], Text):
            merged[-1] = Text(value=merged[-1].value + node.value)
        else:
            merged.append(node)
    return merged


def _fence_closed(node: SyntaxTreeNode, lines: list[str]) -> bool:
    """True when the fence's last mapped line is its closing marker."""
    if node.map is None:
        return True
    start, end = node.map
    last = end - 1
    if last <= start or last >= len(lines):
        return False
    closing = lines[last].strip()
    return closing.startswith(node.markup) and not closing.strip(":")


class _Reader:
    def __init__(
        self,
        roles: Mapping[str, RoleHandler],
        directives: Mapping[str, DirectiveHandler],
        diagnostics: DiagnosticsCollector,
    ) -> None:
        self._roles = roles
        self._directives = directives
        self._diagnostics = diagnostics

    def read(self, source: str) -> list[Node]:
        tokens = _markdown_parser().parse(source)
        return self._blocks(SyntaxTreeNode(tokens).children, source.splitlines())

    def _blocks(self, nodes: list[SyntaxTreeNode], lines: list[str]) -> list[Node]:
        out: list[Node] = []
        for node in nodes:
            match node.type:
                case "heading":
                    out.append(Heading(depth=int(node.tag[1:]), children=self._inline_of(node)))
                case "paragraph":
                    out.append(Paragraph(children=self._inline_of(node)))
                case "bullet_list" | "ordered_list":
                    out.append(
                        ListBlock(
                            ordered=node.type == "ordered_list",
                            start=int(node.attrs.get("start", 1)),
                            children=[self._list_item(item, lines) for item in node.children],
                        )
                    )
                case "colon_fence":
                    out.extend(self._directive(node, lines))
                case "fence" | "code_block":
                    out.append(CodeBlock(lang=node.info.strip() or None, value=node.content))
                case "hr":
                    out.append(Paragraph(children=[Text(value=node.markup)]))
                case "html_block":
                    out.append(Paragraph(children=[Text(value=node.content.rstrip("\n"))]))
                case _:
                    # blockquotes and other containers: keep their content
                    out.extend(self._blocks(node.children, lines))
        return out

    def _list_item(self, node: SyntaxTreeNode, lines: list[str]) -> ListItem:
        children: list[Node] = []
        for child in node.children:
            if child.type == "paragraph" and child.hidden:
                # tight list: paragraph content sits directly in the item
                children.extend(self._inline_of(child))
            else:
                children.extend(self._blocks([child], lines))
        return ListItem(children=children)

    def _directive(self, node: SyntaxTreeNode, lines: list[str]) -> list[Node]:
        info = node.info.strip()
        closed = _fence_closed(node, lines)
        if not closed:
            self._diagnostics.warning(
                DiagnosticKind.UNCLOSED_DIRECTIVE,
                f'Directive "{info}" is not closed; its content is read as document text',
                source=info,
            )
        m = DIRECTIVE_INFO.match(info)
        handler = self._directives.get(m.group("name")) if m else None
        out: list[Node] = []
        if handler is None:
            self._diagnostics.warning(
                DiagnosticKind.UNKNOWN_MARKUP,
                f'Unknown directive "{info}"',
                source=info,
            )
        else:
            out.extend(handler(node.content if closed else ""))
        if not closed:
            out.extend(self.read(node.content))
        return out

    def _inline_of(self, node: SyntaxTreeNode) -> list[Node]:
        if not node.children:
            return []
        return self._inline(node.children[0].children)

    def _inline(self, nodes: list[SyntaxTreeNode]) -> list[Node]:
        out: list[Node] = []
        for node in nodes:
            match node.type:
                case "text" | "html_inline" | "image":
                    out.append(Text(value=node.content))
                case "softbreak" | "hardbreak":
                    out.append(Text(value="\n"))
                case "code_inline":
                    out.append(InlineCode(value=node.content))
                case "strong":
                    out.append(Strong(children=self._inline(node.children)))
                case "em":
                    out.append(Emphasis(children=self._inline(node.children)))
                case "myst_role":
                    out.extend(self._role(node))
                case _:
                    # links and other wrappers: keep their text
                    out.extend(self._inline(node.children))
        return _merge_text(out)

    def _role(self, node: SyntaxTreeNode) -> list[Node]:
        name = node.meta.get("name", "")
        handler = self._roles.get(name)
        if handler is None:
            literal = f"{{{name}}}`{node.content}`"
            self._diagnostics.warning(
                DiagnosticKind.UNKNOWN_MARKUP,
                f'Unknown role "{name}"',
                source=literal,
            )
            return [Text(value=literal)]
        return handler(node.content)


def parse_document(
    source: str,
    roles: Mapping[str, RoleHandler],
    directives: Mapping[str, DirectiveHandler],
    diagnostics: DiagnosticsCollector,
) -> Root:
    """Read document source into a tree. Role and directive output is inserted as-is."""
    return Root(children=_Reader(roles, directives, diagnostics).read(source))


def to_text(node: Root | Node) -> str:
    """Flatten a node to its plain text content."""
    match node:
        case Text(value=value) | InlineCode(value=value) | CodeBlock(value=value):
            return value
        case Root(children=children) | Heading(children=children) | Paragraph(children=children) \
                | ListBlock(children=children) | ListItem(children=children) \
                | Strong(children=children) | Emphasis(children=children) \
                | PointAnnotation(children=children) | ReportPlaceholder(children=children):
            return "".join(to_text(child) for child in children)


def _render_inline(nodes: list) -> str:
    out = []
    for node in nodes:
        match node:
            case Text(value=value):
                out.append(value)
            case InlineCode(value=value):
                fence = "``" if "`" in value else "`"
                pad = " " if fence == "``" else ""
                out.append(f"{fence}{pad}{value}{pad}{fence}")
            case Strong(children=[PointAnnotation() | Strong() as only]):
                # already bold
                out.append(_render_inline([only]))
            case Strong(children=children) | PointAnnotation(children=children):
                out.append(f"**{_render_inline(children)}**")
            case Emphasis(children=children):
                out.append(f"*{_render_inline(children)}*")
            case _:
                out.append(to_text(node))
    return "".join(out)


def _indent(text: str, pad: str) -> str:
    return "\n".join(pad + line if line else line for line in text.split("\n"))


def _render_item(item: ListItem, marker: str) -> str:
    parts: list[str] = []
    inline: list[Node] = []
    for child in item.children:
        if isinstance(child, INLINE_TYPES):
            inline.append(child)
            continue
        if inline:
            parts.append(_render_inline(inline))
            inline = []
        parts.append(_render_block(child))
    if inline:
        parts.append(_render_inline(inline))
    body = "\n".join(parts)
    first, _, rest = body.partition("\n")
    if not rest:
        return f"{marker}{first}"
    return f"{marker}{first}\n{_indent(rest, ' ' * len(marker))}"


def _render_block(node: Node) -> str:
    match node:
        case Heading(depth=depth, children=children):
            return f"{'#' * depth} {_render_inline(children)}"
        case ListBlock(ordered=ordered, start=start, children=items):
            markers = [f"{start + i}. " if ordered else "- " for i in range(len(items))]
            return "\n".join(_render_item(item, marker) for item, marker in zip(items, markers))
        case ListItem():
            return _render_item(node, "- ")
        case CodeBlock(lang=lang, value=value):
            return f"```{lang or ''}\n{value}```"
        case Paragraph(children=children) | ReportPlaceholder(children=children):
            return _render_inline(children)
        case _:
            return _render_inline([node])


def render_markdown(tree: Root) -> str:
    """Render a (transformed) tree back to Markdown, blocks separated by a blank line."""
    blocks = [_render_block(node) for node in tree.children]
    return "\n\n".join(blocks) + "\n" if blocks else ""
