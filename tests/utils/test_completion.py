import pytest
from awsctx.utils.completion import completion_script, SUBCOMMANDS, SUPPORTED_SHELLS

@pytest.mark.parametrize("shell", ["bash", "zsh", "fish"])
def test_completion_script(shell):
    """Test that every script completes subcommands and profiles."""
    script = completion_script(shell)

    for subcommand in SUBCOMMANDS:
        assert subcommand in script
    assert "awsctx list-contexts --plain" in script
    assert "PROG" not in script

def test_completion_script_bash():
    """Test the bash registration."""
    script = completion_script("bash")

    assert script.startswith("# awsctx completion for bash")
    assert "complete -F _awsctx_completion awsctx" in script

def test_completion_script_custom_prog():
    """Test completion for a renamed command."""
    assert "compdef _ctx ctx" in completion_script("zsh", prog="ctx")

def test_completion_script_unsupported_shell():
    """Test an unknown shell."""
    with pytest.raises(ValueError):
        completion_script("powershell")

def test_supported_shells():
    """Test the list of shells offered by the CLI."""
    assert SUPPORTED_SHELLS == ["bash", "fish", "zsh"]
