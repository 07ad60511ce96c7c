"""Generate game state-machine sources from a JSON description."""

from __future__ import annotations

import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from string import Template
from typing import Any

_SEPARATORS = re.compile(r"[_\- /]+")


class GeneratorError(Exception):
    """Raised when the configuration cannot be read or output cannot be written."""


@dataclass(frozen=True)
class StateTransition:
    """One transition out of a state: the triggering event and the target state."""

    event: str = ""
    to: str = ""


@dataclass
class GameConfig:
    """A game's state machine as described by its JSON configuration."""

    state: dict[str, list[StateTransition]] = field(default_factory=dict)
    game_key: str = ""
    game_name: str = ""
    before: bool = False
    after: bool = False
    lock_group: str = ""


def to_camel_case(s: str) -> str:
    """Split on ``_``, ``-``, space and ``/`` and join the capitalised parts."""
    return "".join(
        part[0].upper() + part[1:].lower() for part in _SEPARATORS.split(s) if part
    )


def generate_handler_name(game_struct_name: str, state: str, event: str) -> str:
    """Name of the handler function for ``event`` in ``state``."""
    return f"{game_struct_name}{to_camel_case(state)}{to_camel_case(event)}Handler"


def _struct_name(game_key: str) -> str:
    return to_camel_case(game_key) + "Game"


def _handler_package(game_key: str) -> str:
    return game_key.lower() + "_handler"


def _field(obj: dict[str, Any], name: str) -> Any:
    if name in obj:
        return obj[name]
    lowered = name.lower()
    for key, value in obj.items():
        if key.lower() == lowered:
            return value
    return None


def _as_str(value: Any, name: str) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValueError(f"field {name!r} must be a string")
    return value


def _as_bool(value: Any, name: str) -> bool:
    if value is None:
        return False
    if not isinstance(value, bool):
        raise ValueError(f"field {name!r} must be a boolean")
    return value


def _as_object(value: Any, name: str) -> dict[str, Any]:
    if not isinstance(value, dict):
        raise ValueError(f"{name} must be an object")
    return value


def _parse_transitions(value: Any, state: str) -> list[StateTransition]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ValueError(f"transitions of state {state!r} must be a list")
    transitions = []
    for item in value:
        if item is None:
            transitions.append(StateTransition())
            continue
        obj = _as_object(item, f"transition of state {state!r}")
        transitions.append(
            StateTransition(
                event=_as_str(_field(obj, "Event"), "Event"),
                to=_as_str(_field(obj, "To"), "To"),
            )
        )
    return transitions


def _parse_config(data: Any) -> GameConfig:
    obj = _as_object(data, "configuration")
    raw_state = _field(obj, "state")
    states = {} if raw_state is None else _as_object(raw_state, "field 'state'")
    return GameConfig(
        state={name: _parse_transitions(value, name) for name, value in states.items()},
        game_key=_as_str(_field(obj, "game_key"), "game_key"),
        game_name=_as_str(_field(obj, "game_name"), "game_name"),
        before=_as_bool(_field(obj, "before"), "before"),
        after=_as_bool(_field(obj, "after"), "after"),
        lock_group=_as_str(_field(obj, "lock_group"), "lock_group"),
    )


def load_config(config_path: str | Path) -> GameConfig:
    """Read and parse a game configuration file."""
    try:
        text = Path(config_path).read_bytes()
    except OSError as exc:
        raise GeneratorError(f"读取配置文件失败: {exc}") from exc
    try:
        return _parse_config(json.loads(text))
    except ValueError as exc:
        raise GeneratorError(f"解析配置文件失败: {exc}") from exc


_GAME_HEAD = Template(
    """
// Code generated by game-codegen DO NOT EDIT.
package internal

import (
\t"context"
\t"slp/rpc/server/internal/room_game/state/internal/${handler_package}"
)

// ${struct} ${game_name}游戏结构体
type ${struct} struct {
\tBaseGameStateMachine
}

// 业务参数
type ${struct}Param struct {
}

// GetGameKey 实现StateMachine接口
func (g *${struct}) GetGameKey() string {
\treturn "${game_key}"
}"""
)

_GAME_BEFORE = Template(
    """
// BeforeTransition 所有事件全局前置处理函数
func (g *${struct}) Before(ctx context.Context, gameId int64, event string, val ...any) error {
\treturn ${handler_package}.Before(ctx, gameId, event, val...)
}
"""
)

_GAME_AFTER = Template(
    """
// AfterTransition 所有事件全局后置处理函数
func (g *${struct}) After(ctx context.Context, gameId int64, event string, val ...any) error {
\treturn ${handler_package}.After(ctx, gameId, event, val...)
}
"""
)

_TRANSITIONS_HEAD = Template(
    """

func (g *${struct}) Transitions() map[string][]Transition {
\tdata := map[string][]Transition{
\t\t"""
)

_STATE_HEAD = Template(
    """
\t\t"${state}": {
\t\t\t"""
)

_TRANSITION = Template(
    """
\t\t\t{
\t\t\t\tEvent:   "${event}",
\t\t\t\tTo:      "${to}",
\t\t\t\tLockGroup:"${lock_group}",
\t\t\t\tHandler: ${handler_package}.${handler},
\t\t\t},
\t\t\t"""
)

_STATE_TAIL = """
\t\t},
\t\t"""

_TRANSITIONS_TAIL = """
\t}
\treturn data
}
"""

_HANDLER = Template(
    """
package ${handler_package}

import (
\t"context"
)

func ${handler_name}(ctx context.Context, gameKey string, gameId int64, val ...interface{}) error {
\t// TODO: 实现${state}状态下的${event}事件处理逻辑
\t// 可以通过val获取事件相关参数
\treturn nil
}
"""
)

_BEFORE = Template(
    """
package ${handler_package}

import (
\t"context"
)

// Before 全局前置处理函数
func Before(ctx context.Context, gameId int64, event string, val ...any) error {
\t// TODO: 实现全局前置处理逻辑
\t// 示例：记录日志、权限检查等
\treturn nil
}
"""
)

_AFTER = Template(
    """
package ${handler_package}

import (
\t"context"
)

// After 全局后置处理函数
func After(ctx context.Context, gameId int64, event string, val ...any) error {
\t// TODO: 实现全局后置处理逻辑
\t// 示例：更新统计信息、发送通知等
\treturn nil
}
"""
)


def render_game_file(config: GameConfig) -> str:
    """Render the state-machine source for ``config``; states appear sorted by name."""
    struct = _struct_name(config.game_key)
    package = _handler_package(config.game_key)
    names = {"struct": struct, "handler_package": package}

    pieces = [
        _GAME_HEAD.substitute(
            names, game_name=config.game_name, game_key=config.game_key
        )
    ]
    if config.before:
        pieces.append(_GAME_BEFORE.substitute(names))
    if config.after:
        pieces.append(_GAME_AFTER.substitute(names))
    pieces.append(_TRANSITIONS_HEAD.substitute(names))
    for state in sorted(config.state):
        pieces.append(_STATE_HEAD.substitute(state=state))
        for transition in config.state[state]:
            pieces.append(
                _TRANSITION.substitute(
                    names,
                    event=transition.event,
                    to=transition.to,
                    lock_group=config.lock_group,
                    handler=generate_handler_name(struct, state, transition.event),
                )
            )
        pieces.append(_STATE_TAIL)
    pieces.append(_TRANSITIONS_TAIL)
    return "".join(pieces)


def render_handler(handler_package: str, handler_name: str, state: str, event: str) -> str:
    """Render the stub source of one transition handler."""
    return _HANDLER.substitute(
        handler_package=handler_package,
        handler_name=handler_name,
        state=to_camel_case(state),
        event=to_camel_case(event),
    )


def render_before(handler_package: str) -> str:
    """Render the stub source of the global before-hook."""
    return _BEFORE.substitute(handler_package=handler_package)


def render_after(handler_package: str) -> str:
    """Render the stub source of the global after-hook."""
    return _AFTER.substitute(handler_package=handler_package)


def _write(path: Path, text: str, failure: str) -> None:
    try:
        path.write_text(text, encoding="utf-8")
    except OSError as exc:
        raise GeneratorError(f"{failure}: {exc}") from exc


class GameGenerator:
    """Writes the game file and handler stubs for one configuration."""

    def __init__(self, config_path: str | Path, output_dir: str | Path) -> None:
        self.config = load_config(config_path)
        self.output_dir = Path(output_dir)
        key = self.config.game_key.lower()
        internal = self.output_dir / "state" / "internal"
        self.handler_dir = internal / f"{key}_handler"
        self.game_file_path = internal / f"{key}_game.go"

    @property
    def _struct(self) -> str:
        return _struct_name(self.config.game_key)

    @property
    def _package(self) -> str:
        return _handler_package(self.config.game_key)

    def generate(self) -> None:
        """Create directories, then write the game file and any missing stubs."""
        try:
            self.handler_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise GeneratorError(f"创建目录失败: {exc}") from exc
        self._generate_game_file()
        self._generate_handler_files()

    def _generate_game_file(self) -> None:
        _write(self.game_file_path, render_game_file(self.config), "写入游戏文件失败")
        if self.config.before:
            self._generate_hook(
                "before.go", render_before(self._package), "写入before文件失败", "生成before处理文件"
            )
        if self.config.after:
            self._generate_hook(
                "after.go", render_after(self._package), "写入after文件失败", "生成after处理文件"
            )
        print(f"生成游戏文件: {self.game_file_path}")

    def _generate_hook(self, name: str, text: str, failure: str, done: str) -> None:
        path = self.handler_dir / name
        if path.exists():
            print(f"文件已存在，跳过生成: {path}")
            return
        _write(path, text, failure)
        print(f"{done}: {path}")

    def _generate_handler_files(self) -> None:
        for state, transitions in self.config.state.items():
            for transition in transitions:
                handler_name = generate_handler_name(self._struct, state, transition.event)
                file_name = handler_name.replace("Handler", "").lower() + ".go"
                path = self.handler_dir / file_name
                if path.exists():
                    print(f"文件已存在，跳过生成: {path}")
                    continue
                text = render_handler(self._package, handler_name, state, transition.event)
                _write(path, text, "写入处理函数文件失败")
                print(f"生成处理函数文件: {path}")