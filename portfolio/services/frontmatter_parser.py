from dataclasses import dataclass, field
from typing import Any, Dict

import frontmatter


@dataclass
class ParsedDocument:
    data: Dict[str, Any] = field(default_factory=dict)
    content: str = ""


class FrontmatterParser:
    """Split markdown documents into their YAML header and body."""

    def parse(self, text: str) -> ParsedDocument:
        """Parse ``text``; a document without a leading fence is all body."""
        if not text.lstrip().startswith("---"):
            return ParsedDocument(data={}, content=text)

        try:
            metadata, content = frontmatter.parse(text)
        except ValueError:
            # Opening fence with no closing fence: a leading horizontal rule.
            return ParsedDocument(data={}, content=text)
        return ParsedDocument(data=dict(metadata or {}), content=content)

    def dump(self, data: Dict[str, Any], content: str = "") -> str:
        post = frontmatter.Post(content)
        post.metadata.update(data)
        return frontmatter.dumps(post, sort_keys=False) + "\n"
