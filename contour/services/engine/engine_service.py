"""Contour Engine Service - mode state machine over the composer input"""
import asyncio
import logging
import random
from datetime import datetime
from typing import Callable, Dict, List, Optional, Set

from contour import config
from contour.models.command import Command, CommandHandler, CommandCategory, HandlerKind
from contour.models.module import ModuleId, ResolvableResult
from contour.models.state import ContourMode, ContourState, ModuleData, INITIAL_STATE
from contour.services.commands import CommandRegistry, command_registry, register_all_commands, resolve_navigation
from contour.services.detectors.timer import duration_label
from contour.services.resolvers import BaseResolver, ResolverRegistry, build_default_resolvers
from contour.services.timer import IntervalScheduler, TimerScheduler
from contour.services.timer.models.timer_state import TimerPhase, TimerState
from .pipeline import auto_detect, focused_detect, apply_resolution

logger = logging.getLogger(__name__)

# Channels whose results complete asynchronously
RESOLVED_CHANNELS = (ModuleId.CURRENCY, ModuleId.TRANSLATOR, ModuleId.DICTIONARY)


def _local_now() -> datetime:
    return datetime.now().astimezone()


def _default_commands() -> CommandRegistry:
    if not command_registry.has_commands():
        register_all_commands(command_registry)
    return command_registry


class ContourEngine:
    """
    Owns one ContourState and everything that mutates it.

    Every public call returns the new immutable snapshot. Resolver results and
    timer ticks re-enter through the same `_set_state` path, and listeners
    registered with `subscribe` are told about each change.

    Must be driven from a single event loop. Resolutions are scheduled on the
    running loop; without one, network-backed results stay in their loading
    state.
    """

    def __init__(
        self,
        resolvers: Optional[ResolverRegistry] = None,
        commands: Optional[CommandRegistry] = None,
        interval_scheduler: Optional[IntervalScheduler] = None,
        clock: Optional[Callable[[], datetime]] = None,
        rng: Optional[random.Random] = None,
        on_copy: Optional[Callable[[str], None]] = None,
        on_navigate: Optional[Callable[[str], None]] = None,
        on_timer_complete: Optional[Callable[[TimerState], None]] = None,
        command_trigger: str = config.COMMAND_TRIGGER,
    ):
        self._resolvers = resolvers if resolvers is not None else build_default_resolvers()
        self._commands = commands if commands is not None else _default_commands()
        self._clock = clock or _local_now
        self._rng = rng
        self._on_copy = on_copy
        self._on_navigate = on_navigate
        self._on_timer_complete = on_timer_complete
        self._trigger = command_trigger

        self._state: ContourState = INITIAL_STATE
        self._generations: Dict[ModuleId, int] = {channel: 0 for channel in RESOLVED_CHANNELS}
        self._pending: Set[asyncio.Task] = set()
        self._listeners: List[Callable[[ContourState], None]] = []
        self._timer = TimerScheduler(
            interval_scheduler=interval_scheduler,
            on_change=self._on_timer_change,
            on_complete=self._on_timer_completed,
        )

    # ─── Read side ────────────────────────────────────────────

    @property
    def state(self) -> ContourState:
        return self._state

    @property
    def is_visible(self) -> bool:
        return self._state.mode != ContourMode.HIDDEN

    @property
    def is_focused(self) -> bool:
        return self._state.module is not None and self._state.module.focused

    @property
    def selected_command(self) -> Optional[Command]:
        state = self._state
        if state.mode != ContourMode.COMMANDS or not state.commands:
            return None
        return state.commands[state.selected_index]

    @property
    def timer(self) -> TimerScheduler:
        return self._timer

    def generation(self, channel: ModuleId) -> int:
        return self._generations[channel]

    # ─── Input ────────────────────────────────────────────────

    def analyze(self, text: str) -> ContourState:
        """
        Re-classify the composer text. Called on every content change.

        Focused modules are sticky: only their own detector runs, and an
        empty input leaves the bare placeholder instead of hiding.
        """
        trimmed = text.strip()
        module = self._state.module

        if self._state.mode == ContourMode.MODULE and module is not None and module.focused:
            return self._analyze_focused(module.id, trimmed)

        if not trimmed:
            return self._hide()

        if trimmed.startswith(self._trigger):
            return self._show_commands(trimmed[len(self._trigger):])

        detected = auto_detect(trimmed, now=self._clock(), rng=self._rng)
        if detected is None:
            return self._hide()
        return self._show_module(detected)

    def _analyze_focused(self, module_id: ModuleId, trimmed: str) -> ContourState:
        if module_id == ModuleId.TIMER and self._timer.phase == TimerPhase.RUNNING:
            # live countdown and input are mutually exclusive
            return self._state

        detected = focused_detect(module_id, trimmed, now=self._clock(), rng=self._rng)
        if module_id == ModuleId.TIMER:
            if detected.timer is not None:
                self._timer.load(detected.timer)
            else:
                self._timer.discard()
        return self._show_module(detected)

    def _show_commands(self, query: str) -> ContourState:
        self._leave_module()
        commands = self._search(query)
        return self._set_state(ContourState(
            mode=ContourMode.COMMANDS,
            commands=commands,
            command_query=query,
            selected_index=0,
        ))

    def _search(self, query: str) -> List[Command]:
        commands = self._commands.search_commands(query)
        target = resolve_navigation(query)
        if target is None:
            return commands
        # "/go cal": the resolved page leads the navigation group
        shortcut = Command(
            id=f"go-{target.target}",
            name=f"Go to {target.target.title()}",
            description=f"Open {target.path}",
            category=CommandCategory.NAVIGATION,
            icon=target.icon,
            handler=CommandHandler(kind=HandlerKind.NAVIGATE, target=target.path),
        )
        commands = [cmd for cmd in commands if cmd.handler != shortcut.handler]
        index = next(
            (i for i, cmd in enumerate(commands) if cmd.category == CommandCategory.NAVIGATION),
            len(commands),
        )
        return commands[:index] + [shortcut] + commands[index:]

    def _show_module(self, module: ModuleData) -> ContourState:
        self._bump_generations()
        if module.id != ModuleId.TIMER:
            self._timer.discard()
        state = self._set_state(ContourState(mode=ContourMode.MODULE, module=module))
        result = module.result
        if isinstance(result, ResolvableResult) and result.needs_resolution:
            self._dispatch(module.id, result)
        return state

    # ─── Command palette ──────────────────────────────────────

    def select_up(self) -> ContourState:
        state = self._state
        if state.mode != ContourMode.COMMANDS or not state.commands:
            return state
        index = len(state.commands) - 1 if state.selected_index <= 0 else state.selected_index - 1
        return self._set_state(state.model_copy(update={"selected_index": index}))

    def select_down(self) -> ContourState:
        state = self._state
        if state.mode != ContourMode.COMMANDS or not state.commands:
            return state
        index = 0 if state.selected_index >= len(state.commands) - 1 else state.selected_index + 1
        return self._set_state(state.model_copy(update={"selected_index": index}))

    def select_command(self, command: Optional[Command] = None) -> ContourState:
        """Run a command (default: the highlighted one) by its handler kind."""
        command = command or self.selected_command
        if command is None:
            return self._state
        if command.handler.kind == HandlerKind.MODULE:
            return self.focus_on_module(command.handler.target)

        logger.info(f"Navigate command: {command.id} -> {command.handler.target}")
        if self._on_navigate is not None:
            try:
                self._on_navigate(command.handler.target)
            except Exception as e:
                logger.warning(f"Navigation callback failed: {e}")
        return self.dismiss()

    # ─── Lifecycle ────────────────────────────────────────────

    def focus_on_module(self, handler_id: str) -> ContourState:
        """The only way into focused mode. Starts from the bare placeholder."""
        try:
            module_id = ModuleId(handler_id)
        except ValueError:
            logger.warning(f"Unknown module id: {handler_id}")
            return self._state
        self._leave_module()
        logger.info(f"Focused module: {module_id.value}")
        return self._set_state(ContourState(
            mode=ContourMode.MODULE,
            module=ModuleData.bare(module_id, focused=True),
        ))

    def dismiss(self) -> ContourState:
        return self._hide()

    def _hide(self) -> ContourState:
        self._leave_module()
        return self._set_state(INITIAL_STATE)

    def _leave_module(self) -> None:
        self._timer.discard()
        self._bump_generations()

    # ─── Timer controls ───────────────────────────────────────

    def _timer_active(self) -> bool:
        module = self._state.module
        return self._state.mode == ContourMode.MODULE and module is not None and module.id == ModuleId.TIMER

    def start_timer(self) -> ContourState:
        if self._timer_active():
            self._timer.start()
        return self._state

    def toggle_timer(self) -> ContourState:
        if self._timer_active():
            self._timer.toggle()
        return self._state

    def reset_timer(self) -> ContourState:
        if self._timer_active():
            self._timer.reset()
        return self._state

    def set_timer_duration(self, seconds: int, label: str = "") -> ContourState:
        if not self._timer_active():
            logger.debug("set_timer_duration ignored: timer module not active")
            return self._state
        self._timer.set_duration(seconds, label or (duration_label(seconds) if seconds and seconds > 0 else ""))
        return self._state

    def _on_timer_change(self, timer_state: TimerState) -> None:
        if not self._timer_active():
            return
        module = self._state.module
        self._set_state(self._state.model_copy(update={"module": module.model_copy(update={"timer": timer_state})}))

    def _on_timer_completed(self, timer_state: TimerState) -> None:
        logger.info(f"Timer complete: {timer_state.label}")
        if self._on_timer_complete is not None:
            self._on_timer_complete(timer_state)

    # ─── Host callbacks ───────────────────────────────────────

    def on_copy_value(self, text: str) -> None:
        """Forward a copied value to the host clipboard."""
        if self._on_copy is None:
            logger.debug("No copy handler registered")
            return
        try:
            self._on_copy(text)
        except Exception as e:
            logger.warning(f"Copy callback failed: {e}")

    def subscribe(self, listener: Callable[[ContourState], None]) -> Callable[[], None]:
        """Register a re-render listener. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─── Resolution ───────────────────────────────────────────

    def _bump_generations(self) -> None:
        # any state change supersedes every in-flight lookup
        for channel in self._generations:
            self._generations[channel] += 1

    def _dispatch(self, module_id: ModuleId, partial: ResolvableResult) -> None:
        if not self._resolvers.has_resolver(module_id):
            logger.warning(f"No resolver registered for {module_id.value}")
            return
        resolver = self._resolvers.get_resolver(module_id)
        captured = self._generations[module_id]
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug(f"No running event loop; {module_id.value} stays loading")
            return
        task = loop.create_task(self._resolve(module_id, captured, resolver, partial))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        logger.debug(f"Dispatched {module_id.value} resolution (generation {captured})")

    async def _resolve(
        self,
        module_id: ModuleId,
        captured: int,
        resolver: BaseResolver,
        partial: ResolvableResult,
    ) -> None:
        try:
            resolved = await resolver.resolve(partial)
        except Exception as e:
            logger.error(f"Resolver {module_id.value} raised: {e}")
            resolved = BaseResolver.failed(partial, "Lookup failed")

        updated = apply_resolution(self._state, module_id, captured, self._generations[module_id], resolved)
        if updated is self._state:
            logger.debug(f"Discarded stale {module_id.value} result (generation {captured})")
            return
        self._set_state(updated)

    async def wait_for_pending(self) -> None:
        """Await every in-flight resolution, including ones started meanwhile."""
        while self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)

    # ─── State ────────────────────────────────────────────────

    def _set_state(self, state: ContourState) -> ContourState:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.warning(f"State listener failed: {e}")
        return state
