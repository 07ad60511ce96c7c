import json

from slpctl.cli import main, state_exec


def _write_config(folder, name="game.json", key="dice"):
    config = {
        "game_key": key,
        "game_name": "Dice",
        "state": {"idle": [{"Event": "start", "To": "playing"}]},
        "before": True,
        "after": False,
        "lock_group": "g",
    }
    (folder / name).write_text(json.dumps(config), encoding="utf-8")


def test_state_exec_requires_file(capsys):
    assert state_exec([]) == 1
    assert "-f 用户指定配置json的文件名" in capsys.readouterr().out


def test_state_exec_generates(tmp_path, capsys):
    _write_config(tmp_path)
    out = tmp_path / "out"
    status = state_exec(["-p", str(tmp_path), "-f", "game.json", "-o", str(out)])
    assert status == 0
    internal = out / "state" / "internal"
    assert (internal / "dice_game.go").is_file()
    assert (internal / "dice_handler" / "before.go").is_file()
    assert not (internal / "dice_handler" / "after.go").exists()
    assert str(out) in capsys.readouterr().out


def test_state_exec_missing_config(tmp_path, capsys):
    status = state_exec(["-p", str(tmp_path), "-f", "absent.json", "-o", str(tmp_path)])
    assert status == 1
    assert "生成失败了" in capsys.readouterr().err


def test_state_exec_bad_json(tmp_path, capsys):
    (tmp_path / "bad.json").write_text("{not json", encoding="utf-8")
    status = state_exec(["-p", str(tmp_path), "-f", "bad.json", "-o", str(tmp_path)])
    assert status == 1
    assert "生成失败了" in capsys.readouterr().err


def test_main_defaults_to_state(capsys):
    assert main([]) == 1
    assert "-f 用户指定配置json的文件名" in capsys.readouterr().out


def test_main_state_with_equals_form(tmp_path):
    _write_config(tmp_path, key="card")
    out = tmp_path / "o"
    status = main(["-op=state", "-p", str(tmp_path), "-f", "game.json", "-o", str(out)])
    assert status == 0
    assert (out / "state" / "internal" / "card_game.go").is_file()


def test_main_codec_requires_table(capsys):
    assert main(["-op", "codec"]) == 0
    assert "必须输入-t参数" in capsys.readouterr().out


def test_main_unknown_op_does_nothing(capsys):
    assert main(["-op", "other"]) == 0
    captured = capsys.readouterr()
    assert captured.out == "" and captured.err == ""