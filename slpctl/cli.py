"""Command line entry point: game state machines or cache codecs."""

from __future__ import annotations

import argparse
import sys

from slpctl.codec import codec_exec
from slpctl.gamegen import GameGenerator, GeneratorError

DEFAULT_JSON_FOLDER = "./rpc/server/internal/room_game/state/json"
DEFAULT_OUTPUT_DIR = "./rpc/server/internal/room_game"


def state_exec(argv: list[str] | None = None) -> int:
    """Generate game state-machine code from a JSON file; returns the exit status."""
    parser = argparse.ArgumentParser(
        prog="slpctl -op state", add_help=False, allow_abbrev=False
    )
    parser.add_argument("-p", dest="folder", default=DEFAULT_JSON_FOLDER, help="游戏状态机的默认目录")
    parser.add_argument("-f", dest="file", default="", help="游戏状态机的默认配置文件名称")
    parser.add_argument("-o", dest="output", default=DEFAULT_OUTPUT_DIR, help="输出目录")
    args = parser.parse_args(argv)

    if not args.file:
        parser.print_help(file=sys.stderr)
        print("-f 用户指定配置json的文件名", end="")
        return 1

    config_path = f"{args.folder}/{args.file}"
    try:
        generator = GameGenerator(config_path, args.output)
    except GeneratorError as exc:
        print(f"生成失败了: {exc}", file=sys.stderr)
        return 1
    try:
        generator.generate()
    except GeneratorError as exc:
        print(f"生成失败: {exc}", file=sys.stderr)
        return 1

    print(f"游戏代码已成功生成到目录: {args.output}")
    return 0


def _split_op(argv: list[str]) -> tuple[str, list[str]]:
    op = "state"
    rest: list[str] = []
    items = iter(argv)
    for arg in items:
        name, sep, value = arg.partition("=")
        if name in ("-op", "--op"):
            op = value if sep else next(items, op)
        else:
            rest.append(arg)
    return op, rest


def main(argv: list[str] | None = None) -> int:
    """Dispatch on ``-op`` (``state`` by default, or ``codec``)."""
    if argv is None:
        argv = sys.argv[1:]
    op, rest = _split_op(list(argv))
    if op == "state":
        return state_exec(rest)
    if op == "codec":
        codec_exec(rest)
    return 0


if __name__ == "__main__":
    sys.exit(main())