"""Step sequencer.

Pure position bookkeeping for the wizard: forward/back transitions within
the primary sequence and the add-experience sub-flow, entering the
sub-flow, and direct jumps from the review step. It knows nothing about
profile data or validation; the controller decides whether a transition
may happen and what its signal means.
"""

from dataclasses import dataclass
from enum import Enum

from career_compass.core.errors import InvalidStateError
from career_compass.wizard.position import (
    FIRST_STEP,
    LAST_STEP,
    LAST_SUB_FLOW_STEP,
    Direction,
    PrimaryPosition,
    PrimaryStep,
    SubFlowPosition,
    SubFlowStep,
    WizardMode,
    WizardPosition,
)


class Signal(str, Enum):
    """What a transition means to the controller."""

    MOVED = "moved"
    FINALIZE = "finalize"
    COMMIT_SUB_FLOW = "commit_sub_flow"
    CANCEL_SUB_FLOW = "cancel_sub_flow"
    EXIT = "exit"


@dataclass(frozen=True)
class Transition:
    """Outcome of one sequencer call.

    Attributes:
        signal: What happened.
        position: Position after the call.
        direction: Direction recorded for the call.
    """

    signal: Signal
    position: WizardPosition
    direction: Direction


class StepSequencer:
    """Tracks the wizard's position and applies transitions.

    Args:
        position: Starting position. Defaults to the first primary step.
    """

    def __init__(self, position: WizardPosition | None = None) -> None:
        self._position: WizardPosition = position or PrimaryPosition(FIRST_STEP)
        self._direction = Direction.FORWARD

    @property
    def position(self) -> WizardPosition:
        return self._position

    @property
    def direction(self) -> Direction:
        return self._direction

    @property
    def mode(self) -> WizardMode:
        return self._position.mode

    @property
    def primary_step(self) -> PrimaryStep:
        """The primary step shown, or resumed to after the sub-flow."""
        if isinstance(self._position, SubFlowPosition):
            return self._position.return_step
        return self._position.step

    def _record(
        self, signal: Signal, position: WizardPosition, direction: Direction
    ) -> Transition:
        self._position = position
        self._direction = direction
        return Transition(signal=signal, position=position, direction=direction)

    def advance(self) -> Transition:
        """Move forward one step.

        Returns:
            MOVED within a sequence, FINALIZE at the last primary step
            (position unchanged), or COMMIT_SUB_FLOW at the last sub-flow
            step (position back on the primary return step).
        """
        position = self._position
        if isinstance(position, SubFlowPosition):
            if position.step < LAST_SUB_FLOW_STEP:
                return self._record(
                    Signal.MOVED,
                    SubFlowPosition(SubFlowStep(position.step + 1), position.return_step),
                    Direction.FORWARD,
                )
            # Returning to the primary flow animates as a backward move
            return self._record(
                Signal.COMMIT_SUB_FLOW,
                PrimaryPosition(position.return_step),
                Direction.BACKWARD,
            )

        if position.step < LAST_STEP:
            return self._record(
                Signal.MOVED,
                PrimaryPosition(PrimaryStep(position.step + 1)),
                Direction.FORWARD,
            )
        return self._record(Signal.FINALIZE, position, Direction.FORWARD)

    def retreat(self) -> Transition:
        """Move back one step.

        Returns:
            MOVED within a sequence, EXIT at the first primary step
            (position unchanged), or CANCEL_SUB_FLOW at the first sub-flow
            step (position back on the primary return step).
        """
        position = self._position
        if isinstance(position, SubFlowPosition):
            if position.step > SubFlowStep.ROLE:
                return self._record(
                    Signal.MOVED,
                    SubFlowPosition(SubFlowStep(position.step - 1), position.return_step),
                    Direction.BACKWARD,
                )
            return self._record(
                Signal.CANCEL_SUB_FLOW,
                PrimaryPosition(position.return_step),
                Direction.BACKWARD,
            )

        if position.step > FIRST_STEP:
            return self._record(
                Signal.MOVED,
                PrimaryPosition(PrimaryStep(position.step - 1)),
                Direction.BACKWARD,
            )
        return self._record(Signal.EXIT, position, Direction.BACKWARD)

    def enter_sub_flow(self) -> Transition:
        """Open the add-experience sub-flow at its first step.

        Raises:
            InvalidStateError: If the sub-flow is already open.
        """
        position = self._position
        if isinstance(position, SubFlowPosition):
            raise InvalidStateError("The add-experience flow is already open")
        return self._record(
            Signal.MOVED,
            SubFlowPosition(SubFlowStep.ROLE, position.step),
            Direction.FORWARD,
        )

    def jump_to(self, step: int) -> Transition:
        """Go directly to a primary step.

        Intervening steps are not validated. Jumping to the current step
        is a no-op move.

        Raises:
            InvalidStateError: If the sub-flow is open.
            ValueError: If step is outside 0..6.
        """
        position = self._position
        if isinstance(position, SubFlowPosition):
            raise InvalidStateError(
                "Finish or cancel the add-experience flow before jumping steps"
            )
        target = PrimaryStep(step)
        direction = Direction.FORWARD if target > position.step else Direction.BACKWARD
        return self._record(Signal.MOVED, PrimaryPosition(target), direction)
