"""
Prompter - the aggregate that ties sources, input, selection and outcome together.

A prompter fans every input change out to all of its sources, tracks which of
them finished through a per-generation SyncQueue, keeps a navigation cursor
over the concatenation of their suggestions, and hands a single outcome to
whoever waits on it.

Lifecycle:
    1. Create with the sources (fixed for the prompter's lifetime)
    2. Call ``set_input()`` on every keystroke; poll ``next_ready()`` or
       ``all_ready()`` to learn when sources caught up
    3. Move the cursor with the ``select_*`` methods
    4. Call ``return_selection()`` / ``return_input()`` to deliver a result,
       or ``destroy()`` to cancel
"""

from __future__ import annotations

import asyncio
import inspect
from collections import deque
from collections.abc import Callable, Sequence
from typing import Any, Optional

from prompter.config import PrompterConfig
from prompter.core import navigator
from prompter.core.channels import SingleSlotChannel
from prompter.core.delivery import wait_for_result
from prompter.core.sync_queue import SyncQueue
from prompter.domain.errors import NoMatchError, PrompterDestroyedError, SourceDestroyError
from prompter.domain.events import (
    Event,
    EventBus,
    InputChanged,
    PrompterDestroyed,
    SelectionChanged,
    SourceReady,
)
from prompter.domain.protocols import MarkableSource, Source
from prompter.domain.types import PromptOutcome, Readiness, Selection, Suggestion
from prompter.logger import get_logger

logger = get_logger("prompter")

Hook = Callable[[], Any]


async def _call_hook(hook: Optional[Hook]) -> None:
    """Run a sync or async zero-argument callable."""
    if hook is None:
        return
    result = hook()
    if inspect.isawaitable(result):
        await result


class Prompter:
    """
    Interactive query over several asynchronous suggestion sources.

    All state lives on the event loop thread; sources compute in their own
    tasks and only talk back through the ready channel.
    """

    def __init__(
        self,
        sources: Sequence[Source],
        *,
        prompt: str = "",
        input: Optional[str] = None,
        must_match: bool = False,
        initializer: Optional[Callable[["Prompter"], None]] = None,
        before_destructor: Optional[Hook] = None,
        after_destructor: Optional[Hook] = None,
        event_bus: Optional[EventBus] = None,
        history: Optional[deque[str]] = None,
        config: Optional[PrompterConfig] = None,
    ):
        """
        Initialize the Prompter.

        Args:
            sources: Suggestion sources in display order
            prompt: Static label shown next to the input
            input: Initial input; when given, sources start updating right away
            must_match: Refuse to return the raw input when nothing is selected
            initializer: Called with the prompter once construction is done
            before_destructor: Run by ``destroy()`` before the sources are destroyed
            after_destructor: Run by ``destroy()`` after the sources are destroyed
            event_bus: Receives input, selection, readiness and teardown events
            history: Input history; returned inputs are pushed to its left end
            config: Behaviour settings (defaults to ``PrompterConfig()``)
        """
        self._sources: tuple[Source, ...] = tuple(sources)
        self.prompt = prompt
        self._input = ""
        self._must_match = must_match
        self._before_destructor = before_destructor
        self._after_destructor = after_destructor
        self._event_bus = event_bus
        self.history = history
        self.config = config or PrompterConfig()

        self._generation = 0
        self._sync_queue: Optional[SyncQueue] = None
        self._selection: Optional[Selection] = navigator.select_first(self._sources)
        self._destroyed = False

        self.result_channel: SingleSlotChannel[Any] = SingleSlotChannel("result")
        self.interrupt_channel: SingleSlotChannel[bool] = SingleSlotChannel("interrupt")

        logger.debug(f"Created prompter {prompt!r} with {len(self._sources)} source(s)")

        if input is not None:
            self.set_input(input)
        if initializer is not None:
            initializer(self)

    def __repr__(self) -> str:
        return f"<Prompter {self.prompt!r} input={self._input!r} generation={self._generation}>"

    # ------------------------------------------------------------------ state

    @property
    def sources(self) -> tuple[Source, ...]:
        return self._sources

    @property
    def input(self) -> str:
        return self._input

    @input.setter
    def input(self, text: str) -> None:
        self.set_input(text)

    @property
    def generation(self) -> int:
        """Number of input generations started so far (0 before the first input)."""
        return self._generation

    @property
    def sync_queue(self) -> Optional[SyncQueue]:
        """Readiness tracker of the current generation."""
        return self._sync_queue

    @property
    def selection(self) -> Optional[Selection]:
        return self._selection

    @property
    def destroyed(self) -> bool:
        return self._destroyed

    @property
    def must_match(self) -> bool:
        """Whether a result has to come from a suggestion.

        True when the prompter itself requires it or the selected source does.
        """
        if self._must_match:
            return True
        source = self.selected_source
        return source is not None and bool(source.must_match())

    def _check_alive(self) -> None:
        if self._destroyed:
            raise PrompterDestroyedError(f"Prompter {self.prompt!r} was destroyed")

    def _publish(self, event: Event) -> None:
        if self._event_bus is not None:
            self._event_bus.publish(event)

    def _set_selection(self, selection: Optional[Selection]) -> None:
        if selection is None or selection == self._selection:
            return
        self._selection = selection
        logger.debug(f"Selection moved to {selection.source!r}[{selection.index}]")
        self._publish(SelectionChanged(selection.source, selection.index))

    # ------------------------------------------------------------------ input

    def set_input(self, text: str) -> str:
        """
        Change the input and start a new generation.

        Every source receives the new text together with a fresh ready
        channel. The selection goes back to the first suggestion of the first
        source. Setting the current input again does nothing.

        Returns:
            The input text

        Raises:
            PrompterDestroyedError: If the prompter was destroyed
        """
        self._check_alive()
        if text == self._input and self._sync_queue is not None:
            return text

        self._input = text
        self._generation += 1
        sync_queue = SyncQueue(len(self._sources), self._generation)
        self._sync_queue = sync_queue
        logger.debug(f"Generation {self._generation} started for input {text!r}")

        for source in self._sources:
            try:
                source.update(text, sync_queue.ready_channel)
            except Exception as e:
                # The source will never report; do it for it so readiness does not stall
                logger.opt(exception=e).error(f"Update of {source!r} failed: {e}")
                sync_queue.ready_channel.put_nowait(source)

        self._selection = None
        self._set_selection(navigator.select_first(self._sources))
        self._publish(InputChanged(text, self._generation))
        return text

    # -------------------------------------------------------------- readiness

    async def next_ready(self, timeout: Optional[float] = None) -> Source | Readiness:
        """
        Wait for the next source of the current generation to finish.

        Args:
            timeout: Seconds to wait; defaults to ``config.ready_timeout``
                (``None`` waits forever)

        Returns:
            ``Readiness.ALL_READY`` when there is nothing left to wait for,
            ``Readiness.NOT_READY`` on timeout, or the source that just reported
        """
        sync_queue = self._sync_queue
        if sync_queue is None or sync_queue.is_settled():
            return Readiness.ALL_READY

        if timeout is None:
            timeout = self.config.ready_timeout
        try:
            source = await asyncio.wait_for(sync_queue.ready_channel.get(), timeout)
        except asyncio.TimeoutError:
            logger.debug(f"Generation {sync_queue.generation}: no source ready within {timeout}s")
            return Readiness.NOT_READY

        if source is None:
            return Readiness.NOT_READY

        sync_queue.record(source)
        if sync_queue is self._sync_queue:
            self._publish(SourceReady(source, sync_queue.generation))
            if self.config.reclamp_on_ready and self._selection is not None and self._selection.source is source:
                self._set_selection(navigator.clamp_selection(self._selection))
        return source

    async def all_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until every source of the current generation finished.

        Args:
            timeout: Per-source wait bound, as in ``next_ready()``

        Returns:
            True when all sources reported, False on timeout
        """
        while True:
            status = await self.next_ready(timeout)
            if status is Readiness.ALL_READY:
                return True
            if status is Readiness.NOT_READY:
                return False

    # -------------------------------------------------------------- selection

    @property
    def selected_source(self) -> Optional[Source]:
        return self._selection.source if self._selection is not None else None

    def selected_suggestion(self) -> Optional[tuple[Suggestion, Source]]:
        """The suggestion under the cursor and its source, if the index is valid."""
        suggestion = navigator.resolve_selection(self._selection)
        if suggestion is None or self._selection is None:
            return None
        return suggestion, self._selection.source

    def select(self, steps: int, wrap_over: bool = False) -> None:
        """Move the cursor ``steps`` suggestions across all sources."""
        self._set_selection(navigator.select(self._sources, self._selection, steps, wrap_over))

    def select_next(self, steps: int = 1, wrap_over: Optional[bool] = None) -> None:
        if wrap_over is None:
            wrap_over = self.config.wrap_over
        self.select(steps, wrap_over)

    def select_previous(self, steps: int = 1, wrap_over: Optional[bool] = None) -> None:
        if wrap_over is None:
            wrap_over = self.config.wrap_over
        self.select(-steps, wrap_over)

    def select_next_source(self, steps: int = 1) -> None:
        self._set_selection(navigator.select_source(self._sources, self._selection, steps))

    def select_previous_source(self, steps: int = 1) -> None:
        self.select_next_source(-steps)

    def select_first(self) -> None:
        self._set_selection(navigator.select_first(self._sources))

    def select_last(self) -> None:
        self._set_selection(navigator.select_last(self._sources))

    # ---------------------------------------------------------------- marking

    def all_marked_suggestions(self) -> list[Suggestion]:
        """Marked suggestions of every source, in source order."""
        return [suggestion for source in self._sources for suggestion in source.marked_suggestions()]

    def _markable_selected_source(self) -> Optional[MarkableSource]:
        source = self.selected_source
        if source is None:
            return None
        if not isinstance(source, MarkableSource):
            logger.warning(f"{source!r} does not support marking")
            return None
        return source

    def toggle_mark(self) -> bool:
        """
        Flip the mark on the selected suggestion.

        Returns:
            True if the suggestion is marked afterwards
        """
        selected = self.selected_suggestion()
        if selected is None:
            return False
        source = self._markable_selected_source()
        if source is None:
            return False
        return source.toggle_mark(selected[0])

    def mark_all(self) -> bool:
        """Mark every suggestion of the selected source. Returns False if unsupported."""
        source = self._markable_selected_source()
        if source is None:
            return False
        source.mark_all()
        return True

    def unmark_all(self) -> bool:
        """Clear the marks of the selected source. Returns False if unsupported."""
        source = self._markable_selected_source()
        if source is None:
            return False
        source.unmark_all()
        return True

    # ----------------------------------------------------------------- result

    def _push_history(self) -> None:
        if self.history is None or not self._input:
            return
        if self.history and self.history[0] == self._input:
            return
        self.history.appendleft(self._input)

    def return_selection(self) -> Any:
        """
        Deliver the current choice on the result channel.

        The result is the list of marked values if anything is marked,
        otherwise the selected suggestion's value, otherwise the raw input
        when no match is required.

        Returns:
            The delivered result

        Raises:
            NoMatchError: If nothing qualifies and a match is required;
                nothing is delivered in that case
            ChannelFullError: If a result was already delivered
            PrompterDestroyedError: If the prompter was destroyed
        """
        self._check_alive()
        marked = self.all_marked_suggestions()
        if marked:
            result: Any = [suggestion.value for suggestion in marked]
        else:
            selected = self.selected_suggestion()
            if selected is not None:
                result = selected[0].value
            elif not self.must_match:
                result = self._input
            else:
                raise NoMatchError(self._input)

        self.result_channel.put(result)
        self._push_history()
        logger.debug(f"Prompter {self.prompt!r} returned {result!r}")
        return result

    def return_input(self) -> str:
        """Deliver the raw input, ignoring selection and marks.

        Raises:
            PrompterDestroyedError: If the prompter was destroyed
        """
        self._check_alive()
        self.result_channel.put(self._input)
        self._push_history()
        return self._input

    async def wait_for_result(self) -> PromptOutcome:
        """Block until a result is returned or the prompter is destroyed."""
        return await wait_for_result(self)

    # ---------------------------------------------------------------- teardown

    async def destroy(self) -> None:
        """
        Tear the prompter down and signal cancellation to waiters.

        Runs the before-destructor hook, destroys every source in order, runs
        the after-destructor hook and finally writes the interrupt channel.
        A failing hook or source does not stop the remaining steps; failures
        are raised together once teardown is complete.

        Raises:
            SourceDestroyError: If a hook or one or more sources failed
        """
        if self._destroyed:
            logger.warning(f"Prompter {self.prompt!r} already destroyed")
            return
        self._destroyed = True

        failures: list[tuple[object, BaseException]] = []

        async def run(owner: object, hook: Optional[Hook]) -> None:
            try:
                await _call_hook(hook)
            except Exception as e:
                logger.opt(exception=e).error(f"Error destroying {owner!r}: {e}")
                failures.append((owner, e))

        try:
            await run("before_destructor", self._before_destructor)
            for source in self._sources:
                await run(source, source.destroy)
            await run("after_destructor", self._after_destructor)
        finally:
            self.interrupt_channel.put(True)
            self._publish(PrompterDestroyed(self.prompt))
            logger.debug(f"Prompter {self.prompt!r} destroyed")

        if failures:
            raise SourceDestroyError(failures)
