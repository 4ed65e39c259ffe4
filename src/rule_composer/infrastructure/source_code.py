"""Source text accessor for an astroid module, handed to rules via get_source_code()."""

from functools import cached_property

import astroid


class AstroidSourceCode:
    """Text, lines and node slices for one parsed module."""

    def __init__(self, module: astroid.nodes.Module, text: str | None = None) -> None:
        self._module = module
        self._text = text

    @property
    def ast(self) -> astroid.nodes.Module:
        return self._module

    @cached_property
    def text(self) -> str:
        if self._text is not None:
            return self._text
        stream = self._module.stream()
        if stream is None:
            return ""
        with stream:
            raw = stream.read()
        return raw.decode(self._module.file_encoding or "utf-8")

    @cached_property
    def lines(self) -> list[str]:
        return self.text.splitlines()

    def get_line(self, lineno: int) -> str:
        """1-based line lookup; empty string past the end."""
        if 1 <= lineno <= len(self.lines):
            return self.lines[lineno - 1]
        return ""

    def get_text(self, node: astroid.nodes.NodeNG | None = None) -> str:
        """Source text covered by node, or the whole module when node is None."""
        if node is None or getattr(node, "lineno", None) is None:
            return self.text
        end_lineno = node.end_lineno if node.end_lineno is not None else node.lineno
        if node.lineno < 1:
            return self.text
        chunk = self.lines[node.lineno - 1:end_lineno]
        if not chunk:
            return ""
        if node.end_col_offset is not None:
            chunk[-1] = chunk[-1][:node.end_col_offset]
        chunk[0] = chunk[0][node.col_offset or 0:]
        return "\n".join(chunk)
