from __future__ import annotations

import contextlib
import os
import sys
from typing import Sequence, TextIO

from .fragments import Fragment, FragmentKind, border, plain, separator
from .logging import logger
from .model import ParallelThreads, StackFrame, ThreadGroup
from .sinks import FileSink, HtmlSink, MultiSink, Sink, StreamSink
from .tokenizer import argument_fragments, name_fragments

DEFAULT_MAX_WIDTH = 100

# Box drawing
BORDER_OPEN = "| "
BORDER_CONTINUE = "|    "  # Extra indent marks a wrapped line
BORDER_CLOSE = " |"
BOX_V = "|"
BOX_H = "-"


class LineRenderer:
    """Lay logical lines out as bordered lines of a fixed width.

    Lines wrap between fragments, never inside one. A fragment wider than
    the box is printed whole and pushes the closing border further right.
    """

    def __init__(self, sink: Sink, max_width: int = DEFAULT_MAX_WIDTH) -> None:
        self.sink = sink
        self.max_width = max_width
        self.separator_line = f"{BOX_V}{BOX_H * max_width}{BOX_V}"

    def render_line(self, fragments: Sequence[Fragment]) -> None:
        if not fragments:
            raise ValueError("Cannot render a line without fragments")

        open_width = len(BORDER_OPEN)
        width = self.sink.write(border(BORDER_OPEN))
        for fragment in fragments:
            if (
                width + len(fragment.text) + len(BORDER_CLOSE) > self.max_width
                and width != open_width
            ):
                self._close(width)
                width = self.sink.write(border(BORDER_CONTINUE))
            width += self.sink.write(fragment)
            if width + len(BORDER_CLOSE) > self.max_width:
                logger.debug(f"Fragment overflows the box: {fragment.text!r}")
        self._close(width)

    def render_separator(self) -> None:
        self.sink.write(border(self.separator_line))
        self.sink.newline()

    def _close(self, width: int) -> None:
        padding = " " * max(self.max_width - width, 0)
        self.sink.write(border(f"{padding}{BORDER_CLOSE}"))
        self.sink.newline()


class ReportRenderer:
    """Render thread groups as a sequence of boxes, one per group."""

    def __init__(
        self,
        sink: Sink,
        *,
        raw_stack_frames: bool = False,
        max_width: int = DEFAULT_MAX_WIDTH,
    ) -> None:
        self.lines = LineRenderer(sink, max_width)
        self.raw_stack_frames = raw_stack_frames

    def render(self, threads: ParallelThreads) -> None:
        groups = len(threads.grouped_threads)
        logger.debug(f"Rendering {threads.thread_count} threads in {groups} groups")
        self._overview(threads)
        for group in threads.grouped_threads:
            self._group(group)

    def _overview(self, threads: ParallelThreads) -> None:
        self.lines.render_separator()
        self.lines.render_line(
            [
                plain(f"Thread count: {threads.thread_count} "),
                plain(f"Unique stack traces: {len(threads.grouped_threads)}"),
            ]
        )
        self.lines.render_separator()

    def _group(self, group: ThreadGroup) -> None:
        self.lines.render_separator()
        self.lines.render_line([Fragment(FragmentKind.HEADER, group.header)])
        self.lines.render_separator()

        extra = extra_info_fragments(group)
        if extra:
            self.lines.render_line(extra)
            self.lines.render_separator()

        for frame in group.thread_info.stack_frames:
            self.lines.render_line(stack_frame_fragments(frame))

        if self.raw_stack_frames:
            self.lines.render_separator()
            self.lines.render_line([plain("Raw stack frames:")])
            for raw in group.thread_info.raw_stack_frames:
                fragments = name_fragments(raw, FragmentKind.TYPE_NAME)
                # An empty raw frame still gets its own (blank) row
                self.lines.render_line(fragments or [plain(raw)])

        self.lines.render_separator()


def extra_info_fragments(group: ThreadGroup) -> list[Fragment]:
    """Exception and lock details of a group; empty when there are none."""
    fragments = []
    exception = group.exception
    if exception is not None:
        fragments.append(Fragment(FragmentKind.EXCEPTION_TYPE, exception.type_name))
        if exception.message is not None:
            fragments.append(separator(": "))
            fragments.append(
                Fragment(FragmentKind.EXCEPTION_MESSAGE, exception.message)
            )

    lock_count = group.thread_info.lock_count
    if not lock_count.is_empty:
        fragments.append(Fragment(FragmentKind.TYPE_NAME, "LockCount"))
        fragments.append(separator(": "))
        fragments.append(Fragment(FragmentKind.METHOD_NAME, str(lock_count)))
    return fragments


def stack_frame_fragments(frame: StackFrame) -> list[Fragment]:
    """Type.Method(arguments) as one logical line."""
    return [
        *name_fragments(frame.type_name, FragmentKind.TYPE_NAME),
        separator("."),
        *name_fragments(frame.method, FragmentKind.METHOD_NAME),
        separator("("),
        *argument_fragments(frame.arguments),
        separator(")"),
    ]


def render_report(
    threads: ParallelThreads,
    *,
    file: TextIO | None = None,
    output_file: str | os.PathLike | None = None,
    html_file: str | os.PathLike | None = None,
    raw_stack_frames: bool = False,
    max_width: int = DEFAULT_MAX_WIDTH,
) -> None:
    """Render a thread report to the console and optional files.

    Every target receives the same stream of fragments. Files are closed
    when rendering ends, also when it ends with an error.

    Args:
        threads: The grouped threads to report.
        file: Console stream. Defaults to sys.stdout.
        output_file: Path of a plain text copy of the report.
        html_file: Path of an HTML copy of the report.
        raw_stack_frames: Also print the unparsed frame text of each group.
        max_width: Width of the box in characters.
    """
    if file is None:
        file = sys.stdout

    with contextlib.ExitStack() as stack:
        sinks: list[Sink] = [StreamSink(file)]
        if output_file is not None:
            sinks.append(stack.enter_context(FileSink(output_file)))
        if html_file is not None:
            sinks.append(stack.enter_context(HtmlSink(html_file)))

        renderer = ReportRenderer(
            MultiSink(*sinks), raw_stack_frames=raw_stack_frames, max_width=max_width
        )
        renderer.render(threads)
