from .fragments import Fragment, FragmentKind
from .model import (
    ExceptionInfo,
    LockCount,
    ParallelThreads,
    StackFrame,
    ThreadGroup,
    ThreadInfo,
)
from .render import LineRenderer, ReportRenderer, render_report
from .sinks import FileSink, HtmlSink, MultiSink, StreamSink
from .tokenizer import tokenize_arguments, tokenize_name

__all__ = [
    "render_report",
    "ReportRenderer",
    "LineRenderer",
    "Fragment",
    "FragmentKind",
    "tokenize_name",
    "tokenize_arguments",
    "StreamSink",
    "FileSink",
    "HtmlSink",
    "MultiSink",
    "ParallelThreads",
    "ThreadGroup",
    "ThreadInfo",
    "StackFrame",
    "ExceptionInfo",
    "LockCount",
]
