from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass

from cogbump.core.result import Err, Ok, Result


@dataclass(frozen=True, slots=True)
class StepAdvance[S]:
    session: S


@dataclass(frozen=True, slots=True)
class StepFinish[S]:
    session: S


type StepOutcome[S] = StepAdvance[S] | StepFinish[S]
type StepHandler[S, E] = Callable[[S], Result[StepOutcome[S], E]]


def advance[S](session: S) -> StepAdvance[S]:
    return StepAdvance(session=session)


def finish[S](session: S) -> StepFinish[S]:
    return StepFinish(session=session)


def run_state_machine[S, K, E](
    *,
    initial_state: S,
    get_step: Callable[[S], K],
    handlers: Mapping[K, StepHandler[S, E]],
    on_advance: Callable[[S], None] | None = None,
) -> Result[S, E]:
    """Drive handlers until one finishes or fails.

    Every handler either advances to a new session (reported through
    ``on_advance``), finishes with a final session, or returns an error,
    which stops the machine immediately.
    """
    current = initial_state

    while True:
        step = get_step(current)
        handler = handlers.get(step)
        if handler is None:
            raise AssertionError(f"no handler for step: {step}")

        outcome = handler(current)
        if isinstance(outcome, Err):
            return outcome

        if isinstance(outcome.value, StepFinish):
            return Ok(outcome.value.session)

        current = outcome.value.session
        if on_advance is not None:
            on_advance(current)
