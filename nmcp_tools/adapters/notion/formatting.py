"""Conversion between Notion objects and text.

Readers turn Notion pages, blocks and property values into the text sent
back to the MCP host. Writers turn simplified tool input (markdown, block
specs, plain property values) into Notion API payloads.
"""

from collections.abc import Callable
from typing import Any

from .schemas import BlockSpec

TITLE_PROPERTY_NAMES = ("title", "Title", "Name", "name")
PREVIEW_LENGTH = 150


# ============================================================================
# READERS
# ============================================================================


def extract_text(rich_text: list[dict[str, Any]] | None) -> str:
    """Extract plain text from Notion rich_text array."""
    if not rich_text:
        return ""
    return "".join(t.get("plain_text", "") for t in rich_text)


def extract_page_title(page: dict[str, Any]) -> str:
    """Extract title from a Notion page object.

    Tries the common title property names first, then any property of
    type `title`.
    """
    properties = page.get("properties") or {}

    for key in TITLE_PROPERTY_NAMES:
        prop = properties.get(key)
        if isinstance(prop, dict) and prop.get("title"):
            return extract_text(prop["title"])

    for prop in properties.values():
        if isinstance(prop, dict) and prop.get("type") == "title" and prop.get("title"):
            return extract_text(prop["title"])

    return "Untitled"


def extract_database_title(database: dict[str, Any], default: str = "Untitled") -> str:
    title = database.get("title")
    if isinstance(title, list) and title:
        return extract_text(title) or default
    return default


def _names(items: list[dict[str, Any]] | None) -> str:
    return ", ".join(item.get("name", "") for item in items or [])


def _date_text(date: dict[str, Any] | None) -> str:
    if not date:
        return ""
    start, end = date.get("start") or "", date.get("end")
    return f"{start} → {end}" if end else start


def _number_text(number: int | float | None) -> str:
    return "" if number is None else str(number)


# Closed set of property kinds rendered for display. Kinds outside this set
# render as an empty string and are skipped by callers.
PROPERTY_READERS: dict[str, Callable[[Any], str]] = {
    "title": extract_text,
    "rich_text": extract_text,
    "number": _number_text,
    "select": lambda value: (value or {}).get("name", ""),
    "multi_select": _names,
    "date": _date_text,
    "checkbox": lambda value: "✓" if value else "✗",
    "url": lambda value: value or "",
    "email": lambda value: value or "",
    "phone_number": lambda value: value or "",
    "status": lambda value: (value or {}).get("name", ""),
    "relation": lambda value: ", ".join(r.get("id", "") for r in value or []),
    "people": _names,
    "files": _names,
}


def property_to_text(prop: dict[str, Any]) -> str:
    """Render one Notion property value as display text."""
    prop_type = prop.get("type", "")
    reader = PROPERTY_READERS.get(prop_type)
    if reader is None:
        return ""
    return reader(prop.get(prop_type))


def block_to_text(block: dict[str, Any]) -> str:
    """Convert a Notion block to a single markdown-ish line."""
    block_type = block.get("type", "")
    block_data = block.get(block_type) or {}
    text = extract_text(block_data.get("rich_text"))

    if block_type == "paragraph":
        return text
    elif block_type == "heading_1":
        return f"# {text}"
    elif block_type == "heading_2":
        return f"## {text}"
    elif block_type == "heading_3":
        return f"### {text}"
    elif block_type == "bulleted_list_item":
        return f"• {text}"
    elif block_type == "numbered_list_item":
        return f"1. {text}"
    elif block_type == "to_do":
        return f"{'☑' if block_data.get('checked') else '☐'} {text}"
    elif block_type == "code":
        return f"```{block_data.get('language', '')}\n{text}\n```"
    elif block_type == "quote":
        return f"> {text}"
    elif block_type == "callout":
        icon = (block_data.get("icon") or {}).get("emoji", "💡")
        return f"{icon} {text}"
    elif block_type == "toggle":
        return f"▶ {text}"
    elif block_type == "divider":
        return "---"
    else:
        return f"[{block_type} block]"


def format_block_tree(blocks: list[dict[str, Any]], indent: int = 0) -> str:
    """Render blocks, and any fetched `children`, one per line."""
    lines = []
    prefix = "  " * indent
    for block in blocks:
        if "type" not in block:
            continue
        text = block_to_text(block)
        if text:
            lines.append(f"{prefix}{text}\n")
        if block.get("children"):
            lines.append(format_block_tree(block["children"], indent + 1))
    return "".join(lines)


def blocks_preview(blocks: list[dict[str, Any]], length: int = PREVIEW_LENGTH) -> str:
    """Join the text of a few blocks into a short preview."""
    parts = []
    for block in blocks:
        block_data = block.get(block.get("type", "")) or {}
        text = extract_text(block_data.get("rich_text"))
        if text:
            parts.append(text)
    preview = " ".join(parts)
    return preview[:length] + "..." if len(preview) > length else preview


# ============================================================================
# WRITERS
# ============================================================================


def rich_text(content: str) -> list[dict[str, Any]]:
    return [{"type": "text", "text": {"content": content}}]


def text_block(block_type: str, content: str) -> dict[str, Any]:
    return {
        "object": "block",
        "type": block_type,
        block_type: {"rich_text": rich_text(content)},
    }


def block_from_spec(spec: BlockSpec) -> dict[str, Any]:
    """Build a Notion block from a simplified block spec."""
    content = spec.content or ""

    if spec.type == "divider":
        return {"object": "block", "type": "divider", "divider": {}}
    if spec.type == "to_do":
        block = text_block("to_do", content)
        block["to_do"]["checked"] = bool(spec.checked)
        return block
    if spec.type == "code":
        block = text_block("code", content)
        block["code"]["language"] = spec.language or "plain text"
        return block
    return text_block(spec.type, content)


def markdown_to_blocks(markdown: str) -> list[dict[str, Any]]:
    """Convert markdown to Notion blocks.

    Handles headings, bulleted and numbered lists, quotes, dividers, to-dos
    and fenced code. Everything else becomes a paragraph.
    """
    blocks = []
    code_lines: list[str] | None = None
    code_language = ""

    for line in markdown.split("\n"):
        line = line.rstrip()

        # Fenced code
        if line.startswith("```"):
            if code_lines is None:
                code_lines = []
                code_language = line[3:].strip()
            else:
                block = text_block("code", "\n".join(code_lines))
                block["code"]["language"] = code_language or "plain text"
                blocks.append(block)
                code_lines = None
            continue
        if code_lines is not None:
            code_lines.append(line)
            continue

        if not line.strip():
            continue

        if line.startswith("### "):
            blocks.append(text_block("heading_3", line[4:]))
        elif line.startswith("## "):
            blocks.append(text_block("heading_2", line[3:]))
        elif line.startswith("# "):
            blocks.append(text_block("heading_1", line[2:]))
        elif line.startswith("- [ ] ") or line.startswith("- [x] "):
            block = text_block("to_do", line[6:])
            block["to_do"]["checked"] = line.startswith("- [x] ")
            blocks.append(block)
        elif line.startswith("- ") or line.startswith("* "):
            blocks.append(text_block("bulleted_list_item", line[2:]))
        elif line.split(". ", 1)[0].isdigit() and ". " in line:
            blocks.append(text_block("numbered_list_item", line.split(". ", 1)[1]))
        elif line.startswith("> "):
            blocks.append(text_block("quote", line[2:]))
        elif line.strip() == "---":
            blocks.append({"object": "block", "type": "divider", "divider": {}})
        else:
            blocks.append(text_block("paragraph", line))

    # Unterminated fence: keep what was collected
    if code_lines is not None:
        block = text_block("code", "\n".join(code_lines))
        block["code"]["language"] = code_language or "plain text"
        blocks.append(block)

    return blocks


def to_notion_property(key: str, value: Any) -> dict[str, Any]:
    """Convert a plain property value to a Notion property payload.

    Strings become a title when the key is `title`/`name`, else rich text.
    Booleans become checkboxes, numbers numbers, lists multi-selects.
    Dicts are assumed to already be in Notion format. None clears the value.
    """
    if isinstance(value, str):
        if key.lower() in ("title", "name"):
            return {"title": [{"text": {"content": value}}]}
        return {"rich_text": [{"text": {"content": value}}]}
    if isinstance(value, bool):
        return {"checkbox": value}
    if isinstance(value, (int, float)):
        return {"number": value}
    if isinstance(value, list):
        return {"multi_select": [{"name": str(v)} for v in value]}
    if isinstance(value, dict):
        return value
    if value is None:
        return {"rich_text": []}
    return {"rich_text": [{"text": {"content": str(value)}}]}


def to_notion_properties(properties: dict[str, Any]) -> dict[str, Any]:
    return {key: to_notion_property(key, value) for key, value in properties.items()}
