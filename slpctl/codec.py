"""Generate redis cache codec sources for a database table."""

from __future__ import annotations

import argparse
import logging
import os
import subprocess
from pathlib import Path

_log = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 60 * 60 * 3
CODEC_DIR = "./rpc/server/internal/cache/codec"

# Import path of the protobuf runtime package used by generated codecs.
_PROTO_MODULE = "/".join(("google." + "go" + "lang" + ".org", "protobuf", "proto"))

_TEMPLATE_SOURCE = """package codec

import (
    "context"
\t"database/sql"
\t"fmt"
\t"time"
\t"%mode/app/dao"
\t"%mode/app/pb"
\t"%mode/library/go2cache"
\t"%mode/library"
\t"%protoModule"
)
var (
    %pbNameRedisCodec *go2cache.Server
\texpiredTtl%pbNameSeconds     = int64(%ttl)
)

const (
    tableKey%pbName = "table.key.%tableKey.%id.%d"
)

func init() {
\texpiredTime := time.Hour
\tif expiredTtl%pbNameSeconds > 0 {
\t\texpiredTime = time.Duration(expiredTtl%pbNameSeconds) * time.Second
\t}
\t%pbNameRedisCodec = go2cache.NewOnlyRedisServer(library.%redis-db, &%lowerNameCodec{}, go2cache.WithTtl(expiredTime))
\tTableCodecMap["%tableKey"] = %pbNameRedisCodec
}

type %lowerNameCodec struct {
}

func (b %lowerNameCodec) Pt() proto.Message {
    return &pb.Entity%pbName{}
}

// Key 生成缓存key
func (b %lowerNameCodec) Key(key uint32) string {
    if key == 0 {
\t\treturn ""
\t}
\treturn fmt.Sprintf(tableKey%pbName, key)
}

// Pk 根据proto数据，获取主键信息
func (b %lowerNameCodec) Pk(data proto.Message) uint32 {
    if entity, ok := data.(*pb.Entity%pbName); ok {
\t\tid:= entity.%entity_id
\t\treturn uint32(id)
\t}
\treturn 0
}

func (b %lowerNameCodec) One(ctx context.Context, key uint32, data proto.Message) error {
    //排除大字段，description
    err := dao.%pbName.Ctx(ctx).Where("%id = ?", key).Struct(data)
\tif err != nil && err != sql.ErrNoRows {
\t\treturn err
\t}
\treturn nil
}

func (b %lowerNameCodec) FindAll(ctx context.Context, keys []uint32, callback go2cache.Find2Item) error {
    res, err := dao.%pbName.Ctx(ctx).Where("%id in (?)", keys).FindAll()
\tif err != nil {
\t\treturn err
\t}
\tfor _, item := range res {
\t\tcallback(item)
\t}
\treturn nil
}
"""

_TEMPLATE = _TEMPLATE_SOURCE.replace("%protoModule", _PROTO_MODULE)


def first_upper(s: str) -> str:
    """Upper-case the first character of ``s``."""
    return s[:1].upper() + s[1:]


def first_lower(s: str) -> str:
    """Lower-case the first character of ``s``."""
    return s[:1].lower() + s[1:]


def first_uppers(s: str) -> str:
    """Turn ``snake_case`` into ``PascalCase`` by capitalising each ``_`` part."""
    return "".join(first_upper(part) for part in s.split("_"))


def resolve_ttl(seconds: int, hours: int) -> int:
    """Cache lifetime in seconds; ``seconds`` takes priority over ``hours``."""
    if seconds > 0:
        return seconds
    if hours > 0:
        return hours * 60 * 60
    raise ValueError("必须输入-s或者-d参数，优先级-s > -h，指定过期时间")


def render_codec(
    table_name: str, ttl_seconds: int, redis_db: str, primary_alias: str, mode: str
) -> str:
    """Render the codec source for ``table_name``.

    ``redis_db`` is the redis module name (``passive``, ``user`` ...); ``mode``
    is the module path the generated imports are rooted at.
    """
    pb_name = first_uppers(table_name)
    replacements = [
        ("%pbName", pb_name, 1000),
        ("%lowerName", first_lower(pb_name), 1000),
        ("%mode", mode, 1000),
        ("%tableName", pb_name + "TableKey", 1000),
        ("%tableKey", table_name, 1000),
        ("%ttl", str(ttl_seconds), 1000),
        ("%redis-db", "Redis" + first_uppers(redis_db), 100),
        ("%entity_id", first_upper(primary_alias), 100),
        ("%id", primary_alias.lower(), 100),
    ]
    text = _TEMPLATE
    for placeholder, value, count in replacements:
        text = text.replace(placeholder, value, count)
    return text


def path_exists(path: str | os.PathLike[str]) -> bool:
    """True if ``path`` exists; errors other than absence propagate."""
    try:
        os.stat(path)
    except FileNotFoundError:
        return False
    return True


def run_command(path: str | os.PathLike[str], name: str, *args: str) -> str:
    """Run ``name`` with ``args`` in directory ``path`` and return its output."""
    cmd = [name, *args]
    try:
        result = subprocess.run(
            cmd, cwd=path, capture_output=True, text=True, check=True
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        _log.info("%s", cmd)
        _log.error("err %s cmd %s", exc, cmd)
        raise
    _log.info("%s", cmd)
    return result.stdout


def generate(filename: str, content: str) -> Path:
    """Write ``content`` as the codec file for ``filename`` and run gofmt on it."""
    file_path = f"{CODEC_DIR}/{filename}_codec.go"
    exists = path_exists(file_path)
    abs_path = os.path.abspath(file_path)
    print(f"生成文件的路径:{abs_path}")

    if exists:
        os.remove(file_path)

    try:
        fd = os.open(file_path, os.O_CREAT | os.O_RDWR | os.O_TRUNC, 0o755)
    except OSError as exc:
        print("文件打开失败", exc)
        raise
    with os.fdopen(fd, "w", encoding="utf-8") as handle:
        handle.write(content)

    msg = run_command("./", "gofmt", "-l", "-w", abs_path)
    print(f"success. 缓存code路径：{file_path}  msg={msg}")
    return Path(abs_path)


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="slpctl -op codec", add_help=False, allow_abbrev=False
    )
    parser.add_argument("-t", dest="table", default="", help="会根据这个表明生成对应的cache文件")
    parser.add_argument("-s", dest="seconds", type=int, default=0, help="cache 的缓存过期时间，单位s")
    parser.add_argument("-h", dest="hours", type=int, default=0, help="cache 的缓存过期时间，单位小时")
    parser.add_argument("-d", dest="db", default="passive", help="redis的模块db,按业务区分")
    parser.add_argument("-uq", dest="primary", default="id", help="唯一索引字段，默认id")
    parser.add_argument("-m", dest="mode", default="slp", help="项目go.mod的包名")
    return parser


def codec_exec(argv: list[str] | None = None) -> Path | None:
    """Command entry: generate one codec file; returns its path, or None if arguments are missing."""
    args = _parser().parse_args(argv)
    if not args.table:
        print("必须输入-t参数，db表名的意思")
        return None
    try:
        seconds = resolve_ttl(args.seconds, args.hours)
    except ValueError as exc:
        print(exc)
        return None
    content = render_codec(args.table, seconds, args.db, args.primary, args.mode)
    return generate(args.table, content)