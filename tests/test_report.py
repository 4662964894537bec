"""Tests for the full thread report layout."""

import io

from threadrite import (
    FragmentKind,
    LockCount,
    ParallelThreads,
    ReportRenderer,
    StreamSink,
    ThreadGroup,
    ThreadInfo,
)
from threadrite.render import extra_info_fragments, stack_frame_fragments

from .samplethreads import (
    GENERIC_FRAME,
    MONITOR_ENTER,
    WORKER_RUN,
    blocked_thread,
    crashed_thread,
    idle_pool,
    sample_report,
)

SEPARATOR = "|" + "-" * 100 + "|"


def boxed(text, width=100):
    return f"| {text}".ljust(width) + " |"


def render(threads, **kwargs):
    output = io.StringIO()
    ReportRenderer(StreamSink(output), **kwargs).render(threads)
    return output.getvalue().splitlines()


class TestOverview:
    def test_empty_report(self):
        """Only the overview is printed without groups."""
        lines = render(ParallelThreads(thread_count=0))
        assert lines == [
            SEPARATOR,
            boxed("Thread count: 0 Unique stack traces: 0"),
            SEPARATOR,
        ]

    def test_counts(self):
        """The overview counts threads and groups."""
        lines = render(sample_report())
        assert lines[1] == boxed("Thread count: 6 Unique stack traces: 3")


class TestGroups:
    def test_group_without_extra_info(self):
        """No extra info box without exception or locks."""
        group = ThreadGroup.single(
            "Thread #1", ThreadInfo(stack_frames=(WORKER_RUN, MONITOR_ENTER))
        )
        lines = render(ParallelThreads(1, (group,)))
        assert lines[3:] == [
            SEPARATOR,
            boxed("Thread #1"),
            SEPARATOR,
            boxed("MyApp.Worker.Run()"),
            boxed("System.Threading.Monitor.Enter(System.Object, ref System.Boolean)"),
            SEPARATOR,
        ]

    def test_lock_count(self):
        """Held locks get their own box after the header."""
        lines = render(ParallelThreads(1, (blocked_thread(),)))
        assert lines[3:9] == [
            SEPARATOR,
            boxed("Thread #7 (ManagedThreadId 12)"),
            SEPARATOR,
            boxed("LockCount: 1"),
            SEPARATOR,
            boxed("System.Threading.Monitor.Enter(System.Object, ref System.Boolean)"),
        ]

    def test_exception(self):
        """A captured exception is shown with its message."""
        lines = render(ParallelThreads(1, (crashed_thread(),)))
        assert lines[6:] == [
            boxed("System.InvalidOperationException: Boom"),
            SEPARATOR,
            boxed("MyApp.Worker.Run()"),
            SEPARATOR,
        ]

    def test_exception_and_locks_share_a_line(self):
        """Exception and lock count are one logical line."""
        group = ThreadGroup.single(
            "T",
            ThreadInfo(
                lock_count=LockCount(2),
                exception=crashed_thread().thread_info.exception,
                stack_frames=(WORKER_RUN,),
            ),
        )
        lines = render(ParallelThreads(1, (group,)))
        assert lines[6] == boxed("System.InvalidOperationException: BoomLockCount: 2")

    def test_aggregated_group_hides_exception(self):
        """Exceptions are only reported for single threads."""
        lines = render(ParallelThreads(4, (idle_pool(),)))
        assert "hidden" not in "\n".join(lines)
        assert lines[6] == boxed(
            "System.Collections.Generic.Dictionary<System.String,System.Int32>"
            ".TryGetValue(String, out Int32)"
        )

    def test_groups_in_input_order(self):
        """Groups keep the order they were given in."""
        text = "\n".join(render(sample_report()))
        assert text.index("Thread #7") < text.index("Thread #3")
        assert text.index("Thread #3") < text.index("4 threads")

    def test_long_frame_wraps(self):
        """A frame longer than the box wraps onto continuation lines."""
        lines = render(ParallelThreads(1, (blocked_thread(),)), max_width=40)
        frame_lines = [line for line in lines if "Monitor" in line or "Boolean" in line]
        assert len(frame_lines) > 1
        assert all(len(line) == 42 for line in frame_lines)
        assert frame_lines[1].startswith("|    ")


class TestRawStackFrames:
    def test_not_rendered_by_default(self):
        """Raw frames are off unless requested."""
        assert "Raw stack frames:" not in "\n".join(render(sample_report()))

    def test_rendered_after_frames(self):
        """Raw frames follow the parsed frames under a label."""
        lines = render(ParallelThreads(1, (blocked_thread(),)), raw_stack_frames=True)
        assert lines[-5:] == [
            SEPARATOR,
            boxed("Raw stack frames:"),
            boxed("System.Threading.Monitor.Enter(System.Object, Boolean ByRef)"),
            boxed("MyApp.Worker.Run()"),
            SEPARATOR,
        ]

    def test_group_without_raw_frames(self):
        """The label is printed even without raw frames."""
        lines = render(ParallelThreads(1, (crashed_thread(),)), raw_stack_frames=True)
        assert lines[-3:] == [SEPARATOR, boxed("Raw stack frames:"), SEPARATOR]

    def test_empty_raw_frame(self):
        """An empty raw frame gives a blank row."""
        group = ThreadGroup.single("T", ThreadInfo(raw_stack_frames=("",)))
        lines = render(ParallelThreads(1, (group,)), raw_stack_frames=True)
        assert lines[-2] == boxed("")


class TestFragments:
    def test_stack_frame_kinds(self):
        """Type, method and punctuation get their own kinds."""
        fragments = stack_frame_fragments(WORKER_RUN)
        assert [(f.kind, f.text) for f in fragments] == [
            (FragmentKind.TYPE_NAME, "MyApp"),
            (FragmentKind.SEPARATOR, "."),
            (FragmentKind.TYPE_NAME, "Worker"),
            (FragmentKind.SEPARATOR, "."),
            (FragmentKind.METHOD_NAME, "Run"),
            (FragmentKind.SEPARATOR, "("),
            (FragmentKind.SEPARATOR, ")"),
        ]

    def test_generic_frame_has_arguments(self):
        """Arguments and modifiers are classified."""
        kinds = {f.kind for f in stack_frame_fragments(GENERIC_FRAME)}
        assert FragmentKind.ARGUMENT in kinds
        assert FragmentKind.ARGUMENT_MODIFIER in kinds

    def test_no_extra_info(self):
        """Nothing to report gives no fragments."""
        group = ThreadGroup.single("T", ThreadInfo(lock_count=LockCount(0, 0)))
        assert extra_info_fragments(group) == []

    def test_exception_without_message(self):
        """A message-less exception shows only its type."""
        from threadrite import ExceptionInfo

        group = ThreadGroup.single(
            "T", ThreadInfo(exception=ExceptionInfo("System.StackOverflowException"))
        )
        assert [f.text for f in extra_info_fragments(group)] == [
            "System.StackOverflowException"
        ]

    def test_lock_count_range(self):
        """Differing lock counts of a group show as a range."""
        group = ThreadGroup.aggregated("T", ThreadInfo(lock_count=LockCount(1, 3)))
        assert [f.text for f in extra_info_fragments(group)] == [
            "LockCount",
            ": ",
            "1-3",
        ]


def test_rendering_is_repeatable():
    """The same report renders identically twice."""
    assert render(sample_report(), raw_stack_frames=True) == render(
        sample_report(), raw_stack_frames=True
    )
