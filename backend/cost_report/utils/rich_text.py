"""
Rich Text
Whitelist sanitizer for admin-entered input descriptions
"""

from html import escape
from html.parser import HTMLParser

ALLOWED_TAGS = frozenset({"b", "strong", "i", "em", "u", "ul", "ol", "li", "p", "br"})
VOID_TAGS = frozenset({"br"})
# Content of these is dropped entirely, not just the tags
DROP_CONTENT_TAGS = frozenset({"script", "style"})


class _RichTextSanitizer(HTMLParser):
    def __init__(self):
        super().__init__(convert_charrefs=True)
        self.parts: list[str] = []
        self.open_tags: list[str] = []
        self.skip_depth = 0

    def handle_starttag(self, tag, attrs):
        if tag in DROP_CONTENT_TAGS:
            self.skip_depth += 1
            return
        if self.skip_depth or tag not in ALLOWED_TAGS:
            return
        if tag in VOID_TAGS:
            self.parts.append(f"<{tag}>")
            return
        self.parts.append(f"<{tag}>")
        self.open_tags.append(tag)

    def handle_startendtag(self, tag, attrs):
        if not self.skip_depth and tag in VOID_TAGS:
            self.parts.append(f"<{tag}>")

    def handle_endtag(self, tag):
        if tag in DROP_CONTENT_TAGS:
            self.skip_depth = max(0, self.skip_depth - 1)
            return
        if self.skip_depth or tag not in self.open_tags:
            return
        # Close anything left open inside this tag first
        while self.open_tags:
            current = self.open_tags.pop()
            self.parts.append(f"</{current}>")
            if current == tag:
                break

    def handle_data(self, data):
        if not self.skip_depth:
            self.parts.append(escape(data, quote=False))

    def result(self) -> str:
        while self.open_tags:
            self.parts.append(f"</{self.open_tags.pop()}>")
        return "".join(self.parts)


def sanitize_rich_text(value: str) -> str:
    """
    Keep only bold/italic/underline/list/paragraph markup.

    Attributes are always dropped, disallowed tags are removed with their
    text kept, and <script>/<style> blocks disappear completely.
    """
    if not value:
        return ""
    parser = _RichTextSanitizer()
    parser.feed(value)
    parser.close()
    return parser.result()
