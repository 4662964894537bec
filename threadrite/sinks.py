from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Protocol, TextIO

from html5tagger import E  # type: ignore[import]

from .fragments import Fragment, FragmentKind
from .logging import logger

# ANSI escape codes for terminal colors (can be monkeypatched for styling)
ESC = "\x1b["
RESET = f"{ESC}0m"
DIM = f"{ESC}2m"
BOLD = f"{ESC}1m"
EXC = f"{ESC}31m"  # Red for exception types
TYPE_COLOR = f"{ESC}32m"  # Green for type names
FUNC = f"{ESC}38;5;153m"  # Light blue (xterm256 LightSkyBlue1) for methods
ARG = f"{ESC}90m"  # Dark grey for argument types
MODIFIER = f"{ESC}35m"  # Magenta for ref/out/in/params

COLORS = {
    FragmentKind.BORDER: DIM,
    FragmentKind.HEADER: BOLD,
    FragmentKind.EXCEPTION_TYPE: EXC,
    FragmentKind.EXCEPTION_MESSAGE: BOLD,
    FragmentKind.NAMESPACE: DIM,
    FragmentKind.TYPE_NAME: TYPE_COLOR,
    FragmentKind.METHOD_NAME: FUNC,
    FragmentKind.SEPARATOR: DIM,
    FragmentKind.ARGUMENT: ARG,
    FragmentKind.ARGUMENT_MODIFIER: MODIFIER,
}

style = """\
.threadrite pre { font-family: monospace; line-height: 1.2; }
.threadrite .border, .threadrite .separator { color: #888; }
.threadrite .header, .threadrite .excmessage { font-weight: bold; }
.threadrite .exctype { color: #c33; }
.threadrite .typename { color: #393; }
.threadrite .methodname { color: #38c; }
.threadrite .argument { color: #777; }
.threadrite .modifier { color: #a3a; }
"""


class Sink(Protocol):
    """Destination for rendered fragments."""

    def write(self, fragment: Fragment) -> int:
        """Output the fragment and return the width it occupies."""
        ...

    def newline(self) -> None: ...


class StreamSink:
    """Write to a text stream, in colour when it is a terminal."""

    def __init__(self, stream: TextIO, color: bool | None = None) -> None:
        self.stream = stream
        if color is None:
            color = stream.isatty() if hasattr(stream, "isatty") else False
        self.color = color

    def write(self, fragment: Fragment) -> int:
        code = COLORS.get(fragment.kind) if self.color else None
        if code:
            self.stream.write(f"{code}{fragment.text}{RESET}")
        else:
            self.stream.write(fragment.text)
        return len(fragment.text)

    def newline(self) -> None:
        self.stream.write("\n")


class FileSink(StreamSink):
    """Plain text file owned by the sink, closed by close() or on with-exit."""

    def __init__(self, path: str | os.PathLike) -> None:
        self.path = Path(path)
        super().__init__(self.path.open("w", encoding="UTF-8"), color=False)
        logger.debug(f"Writing report to {self.path}")

    def close(self) -> None:
        if not self.stream.closed:
            self.stream.close()
            logger.debug(f"Closed {self.path}")

    def __enter__(self) -> FileSink:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class HtmlSink:
    """Collect fragments and write them as an HTML document when closed.

    Each fragment becomes a span whose class is the fragment kind, inside a
    single <pre> so that the box layout stays intact in a browser.
    """

    def __init__(self, path: str | os.PathLike, *, include_css: bool = True) -> None:
        self.path = Path(path)
        self.include_css = include_css
        self.file: TextIO | None = self.path.open("w", encoding="UTF-8")
        self.fragments: list[Fragment | None] = []  # None marks a newline
        logger.debug(f"Writing HTML report to {self.path}")

    def write(self, fragment: Fragment) -> int:
        self.fragments.append(fragment)
        return len(fragment.text)

    def newline(self) -> None:
        self.fragments.append(None)

    def document(self) -> Any:
        with E.div(class_="threadrite") as doc:
            if self.include_css:
                doc._style(style)
            with doc.pre:
                for fragment in self.fragments:
                    if fragment is None:
                        doc("\n")
                    elif fragment.kind is FragmentKind.TEXT:
                        doc(fragment.text)
                    else:
                        doc.span(fragment.text, class_=fragment.kind.value)
        return doc

    def close(self) -> None:
        if self.file is None:
            return
        try:
            self.file.write(str(self.document()))
        finally:
            self.file.close()
            self.file = None
            logger.debug(f"Closed {self.path}")

    def __enter__(self) -> HtmlSink:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()


class MultiSink:
    """Forward every write to several sinks, in the order they were given."""

    def __init__(self, *sinks: Sink) -> None:
        self.sinks = list(sinks)

    def write(self, fragment: Fragment) -> int:
        widths = [sink.write(fragment) for sink in self.sinks]
        if any(w != len(fragment.text) for w in widths):
            raise RuntimeError(
                f"Sinks disagree on the width of {fragment.text!r}: {widths}"
            )
        return len(fragment.text)

    def newline(self) -> None:
        for sink in self.sinks:
            sink.newline()
