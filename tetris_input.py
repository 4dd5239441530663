"""Initial-delay / repeat input controller shared by keyboard and touch"""
import logging
from dataclasses import dataclass, field
from typing import Dict, Hashable, Optional, Tuple

import pygame

from tetris_config import CONFIG

log = logging.getLogger(__name__)

CONTROL_NAMES = ("left", "right", "down", "up", "space", "pause", "restart")
MOVEMENT = ("left", "right", "down")
ONE_TIME = ("up", "space", "restart", "left", "right", "down")


@dataclass(frozen=True)
class Controls:
    left: bool = False
    right: bool = False
    down: bool = False
    up: bool = False
    space: bool = False
    pause: bool = False
    restart: bool = False


@dataclass
class KeyState:
    held: bool = False
    last_fire: float = 0
    initial_window: bool = False
    has_fired: bool = False
    holders: int = 0


@dataclass(frozen=True)
class InputSource:
    """A family of physical codes mapped onto logical actions."""
    name: str
    bindings: Dict[Hashable, str] = field(default_factory=dict)
    # touch buttons drop movement as soon as the finger lifts
    release_clears_movement: bool = False
    # several fingers may rest on one button; it stays held until the last lifts
    counts_holders: bool = False

    def action_for(self, code) -> Optional[str]:
        return self.bindings.get(code)


KEYBOARD = InputSource("keyboard", {
    pygame.K_LEFT: "left",
    pygame.K_RIGHT: "right",
    pygame.K_DOWN: "down",
    pygame.K_UP: "up",
    pygame.K_SPACE: "space",
    pygame.K_p: "pause",
    pygame.K_r: "restart",
})

TOUCH = InputSource("touch", {
    "left": "left",
    "right": "right",
    "down": "down",
    "rotate": "up",
    "drop": "space",
    "pause": "pause",
    "restart": "restart",
}, release_clears_movement=True, counts_holders=True)


class InputTimingController:
    """Turns press/release events into per-frame game controls.

    Movement actions (left, right, down) fire once on press, again after
    ``initial_delay`` ms, then every ``repeat_rate`` ms (``down_repeat_rate``
    for soft drop) while held. Rotate, hard drop and restart are level
    sensed; pause toggles on each press. The controller keeps its own clock,
    advanced by :meth:`update` once per frame.
    """

    def __init__(self, initial_delay: Optional[float] = None,
                 repeat_rate: Optional[float] = None,
                 down_repeat_rate: Optional[float] = None):
        self.initial_delay = CONFIG["INITIAL_DELAY_MS"] if initial_delay is None else initial_delay
        self.repeat_rate = CONFIG["REPEAT_RATE_MS"] if repeat_rate is None else repeat_rate
        self.down_repeat_rate = CONFIG["DOWN_REPEAT_RATE_MS"] if down_repeat_rate is None else down_repeat_rate
        self.now = 0.0
        self._controls: Dict[str, bool] = dict.fromkeys(CONTROL_NAMES, False)
        self._states: Dict[Tuple[str, Hashable], KeyState] = {}
        self._actions: Dict[Tuple[str, Hashable], str] = {}
        self._pointers: Dict[Hashable, str] = {}

    # ---------- timing ----------
    def set_movement_timing(self, initial_delay: float, repeat_rate: float,
                            down_repeat_rate: Optional[float] = None):
        self.initial_delay = initial_delay
        self.repeat_rate = repeat_rate
        if down_repeat_rate is not None:
            self.down_repeat_rate = down_repeat_rate
        log.debug("movement timing: delay=%s repeat=%s down=%s",
                  self.initial_delay, self.repeat_rate, self.down_repeat_rate)

    def _threshold(self, action: str, state: KeyState) -> float:
        if state.initial_window:
            return self.initial_delay
        return self.down_repeat_rate if action == "down" else self.repeat_rate

    # ---------- press / release ----------
    def press(self, source: InputSource, code) -> bool:
        action = source.action_for(code)
        if action is None:
            return False
        key = (source.name, code)
        state = self._states.setdefault(key, KeyState())
        self._actions[key] = action
        if state.held:
            if source.counts_holders:
                state.holders += 1
            return True
        state.held = True
        state.holders = 1
        state.initial_window = True
        state.last_fire = self.now
        state.has_fired = False
        if action in MOVEMENT:
            self._fire(action)
            state.has_fired = True
        elif action == "pause":
            self._controls["pause"] = not self._controls["pause"]
        else:
            self._controls[action] = True
        return True

    def release(self, source: InputSource, code) -> bool:
        action = source.action_for(code)
        if action is None:
            return False
        state = self._states.get((source.name, code))
        if state is not None:
            if state.held and state.holders > 1:
                state.holders -= 1
                return True
            state.holders = 0
            state.held = False
            state.initial_window = False
            state.has_fired = False
        if action in ("up", "space", "restart"):
            self._controls[action] = False
        if source.release_clears_movement:
            for name in MOVEMENT:
                self._controls[name] = False
        return True

    def _fire(self, action: str):
        for name in MOVEMENT:
            self._controls[name] = False
        self._controls[action] = True

    # ---------- per frame ----------
    def update(self, dt: float):
        self.now += dt
        for key, state in self._states.items():
            action = self._actions[key]
            if not state.held or action not in MOVEMENT or not state.has_fired:
                continue
            if self.now - state.last_fire > self._threshold(action, state):
                state.initial_window = False
                state.last_fire = self.now
                self._fire(action)

    def get_controls(self) -> Controls:
        return Controls(**self._controls)

    def reset_one_time_controls(self):
        for name in ONE_TIME:
            self._controls[name] = False

    def reset_pause(self):
        self._controls["pause"] = False

    def release_held(self):
        """Forget every held key and pending action; the pause toggle survives."""
        for state in self._states.values():
            state.holders = 0
            state.held = False
            state.initial_window = False
            state.has_fired = False
        self._pointers.clear()
        self.reset_one_time_controls()

    def cancel_all(self):
        self.release_held()
        self.reset_pause()

    # ---------- pygame events ----------
    def _pointer_down(self, pointer, name: Optional[str]) -> bool:
        if name is None:
            return False
        self._pointers[pointer] = name
        return self.press(TOUCH, name)

    def _pointer_up(self, pointer) -> bool:
        name = self._pointers.pop(pointer, None)
        if name is None:
            return False
        return self.release(TOUCH, name)

    def handle_event(self, e, dims=None) -> bool:
        """Feed one pygame event; True when it was consumed as game input."""
        if e.type == pygame.KEYDOWN:
            return self.press(KEYBOARD, e.key)
        if e.type == pygame.KEYUP:
            return self.release(KEYBOARD, e.key)
        if dims is None:
            return False
        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1 and not getattr(e, "touch", False):
            return self._pointer_down("mouse", dims.button_at(e.pos))
        if e.type == pygame.MOUSEBUTTONUP and e.button == 1 and not getattr(e, "touch", False):
            return self._pointer_up("mouse")
        if e.type == pygame.FINGERDOWN:
            pos = (int(e.x * dims.total_w), int(e.y * dims.total_h))
            return self._pointer_down(("finger", e.finger_id), dims.button_at(pos))
        if e.type == pygame.FINGERUP:
            return self._pointer_up(("finger", e.finger_id))
        return False
