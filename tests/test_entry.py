"""
Unit tests for the setup-kubesolo entry point
"""
import argparse
import pytest
import setup_kubesolo
from commands.post import Post
from commands.setup import Setup
from services.local import LocalService
from services.state import HandoffState


def _args(**overrides):
    values = {
        "version": None,
        "timeout": None,
        "wait_for_ready": None,
        "dns_readiness": None,
        "cleanup": None,
        "local_storage_shared_path": None,
        "config": None,
        "verbose": False,
    }
    values.update(overrides)
    return argparse.Namespace(**values)


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "setup-kubesolo.yaml"
    path.write_text(f"state_dir: {tmp_path / 'state'}\nuse_sudo: false\n", encoding="utf-8")
    return path


@pytest.fixture(autouse=True)
def quiet_logging(mocker):
    """main() would replace the root handlers pytest captures with"""
    mocker.patch("setup_kubesolo.init_logger")


def test_read_inputs_env_then_flags():
    environ = {"INPUT_TIMEOUT": "120", "INPUT_DNS-READINESS": "false", "INPUT_VERSION": "v1.0.0"}
    inputs = setup_kubesolo.read_inputs(_args(version="v1.1.0", wait_for_ready="false"), environ)
    assert inputs.version == "v1.1.0"
    assert inputs.timeout == 120
    assert inputs.wait_for_ready is False
    assert inputs.dns_readiness is False
    assert inputs.cleanup is True


def test_read_inputs_rejects_bad_boolean():
    with pytest.raises(ValueError, match="wait-for-ready"):
        setup_kubesolo.read_inputs(_args(wait_for_ready="yes"), {})


def test_missing_custom_config_file(tmp_path):
    with pytest.raises(setup_kubesolo.ConfigError):
        setup_kubesolo.load_config(tmp_path / "nope.yaml")


def test_invalid_config_is_config_error(tmp_path, monkeypatch):
    monkeypatch.delenv("INPUT_TIMEOUT", raising=False)
    path = tmp_path / "bad.yaml"
    path.write_text("runtimes:\n  disable_mode: stop\n", encoding="utf-8")
    with pytest.raises(setup_kubesolo.ConfigError, match="disable_mode"):
        setup_kubesolo.get_config(_args(config=str(path)))


def test_container_wires_commands(config_file):
    parser = setup_kubesolo.build_parser()
    args = parser.parse_args(["--config", str(config_file), "post", "--cleanup", "false"])
    di = setup_kubesolo.build_container(args)
    post = di.post()
    assert isinstance(post, Post)
    assert isinstance(post.executor, LocalService)
    assert isinstance(post.state, HandoffState)
    assert post.cfg.inputs.cleanup is False
    assert post.executor is di.executor()
    assert isinstance(di.setup(), Setup)


def test_setup_flags_parse():
    args = setup_kubesolo.build_parser().parse_args(
        ["-v", "setup", "--version", "v1.1.0", "--timeout", "90", "--dns-readiness", "false"]
    )
    assert args.verbose is True
    assert args.command == "setup"
    assert args.timeout == 90
    assert args.dns_readiness == "false"


def test_main_without_command_prints_help(capsys):
    setup_kubesolo.main([])
    assert "usage:" in capsys.readouterr().out


def test_main_runs_command(config_file, mocker):
    run = mocker.patch.object(Post, "run")
    setup_kubesolo.main(["--config", str(config_file), "post"])
    run.assert_called_once()


def test_config_error_never_fails_post(tmp_path):
    setup_kubesolo.main(["--config", str(tmp_path / "missing.yaml"), "post"])


def test_config_error_fails_setup(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        setup_kubesolo.main(["--config", str(tmp_path / "missing.yaml"), "setup"])
    assert excinfo.value.code == 1
