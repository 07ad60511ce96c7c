# slpctl

`slpctl` generates Go source scaffolding for a game service. It has two modes, and you pick one with `-op`:

- **state** (the default): reads a JSON description of a game state machine. It writes the game file and one handler stub for each transition.
- **codec**: writes a Redis-backed cache codec file for a database table. It then runs `gofmt` on the file.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Generating a game state machine

```
slpctl -op state -f my_game.json
```

| Option | Default | Meaning |
|--------|---------|---------|
| `-p` | `./rpc/server/internal/room_game/state/json` | Folder that holds the JSON configuration |
| `-f` | *(required)* | File name of the JSON configuration inside that folder |
| `-o` | `./rpc/server/internal/room_game` | Output directory |

Without `-f`, the command prints its usage and exits with status 1. It also exits with status 1 when the configuration cannot be read or parsed, or when output cannot be written.

The configuration looks like this:

```json
{
  "game_key": "dice",
  "game_name": "Dice",
  "before": true,
  "after": false,
  "lock_group": "dice_lock",
  "state": {
    "waiting": [{"Event": "start", "To": "playing"}],
    "playing": [{"Event": "finish", "To": "waiting"}]
  }
}
```

Field names are matched without regard to case. Missing fields default to empty strings, `false` or an empty state map.

Given that configuration, the generator writes the following files:

- `<output>/state/internal/dice_game.go`: the `DiceGame` struct and its transition table, with states listed in sorted order. This file is rewritten on every run.
- `<output>/state/internal/dice_handler/<handler>.go`: one stub per state and event pair. For example, `dicegamewaitingstart.go` holds `DiceGameWaitingStartHandler`.
- `before.go` and `after.go` in the handler directory, when `before` or `after` is true.

Handler, `before.go` and `after.go` files that already exist are left untouched, so your hand-written logic survives a rerun. The handler directory is created if it is missing.

Names are turned into CamelCase with `slpctl.gamegen.to_camel_case`. The words are split on `_`, `-`, space and `/`. Each word then gets its first letter upper-cased and the rest lower-cased.

From Python:

```python
from slpctl.gamegen import GameGenerator

GameGenerator("rpc/server/internal/room_game/state/json/my_game.json",
              "rpc/server/internal/room_game").generate()
```

`load_config` returns a `GameConfig` made of `StateTransition` entries. The rendering helpers `render_game_file`, `render_handler`, `render_before` and `render_after` return the generated text without touching the disk. Failures to read or parse the configuration, or to write output, raise `GeneratorError`.

## Generating a table cache codec

```
slpctl -op codec -t user_profile -s 600 -d user -uq uid -m slp
```

| Option | Default | Meaning |
|--------|---------|---------|
| `-t` | *(required)* | Database table name |
| `-s` | `0` | Cache lifetime in seconds |
| `-h` | `0` | Cache lifetime in hours, used when `-s` is not given |
| `-d` | `passive` | Redis database module, for example `story`, `property`, `block`, `user` |
| `-uq` | `id` | Unique key column of the table |
| `-m` | `slp` | Module name from the project's `go.mod` |

You must give `-s` or `-h`; when both are given, `-s` wins. If `-t` or both lifetimes are missing, a message is printed and nothing is written.

The file is written to `./rpc/server/internal/cache/codec/<table>_codec.go`, and any existing file at that path is replaced. The `codec` directory is not created, so it must already exist. After writing, `gofmt -l -w` runs on the file, so `gofmt` must be on your `PATH`. A failing `gofmt` raises an error.

From Python, `slpctl.codec.render_codec(table_name, ttl_seconds, redis_db, primary_alias, mode)` returns the codec source as a string. `resolve_ttl(seconds, hours)` applies the same lifetime rules as the command line and raises `ValueError` when neither is positive. `codec_exec(argv)` runs the whole command and returns the path of the written file, or `None`.