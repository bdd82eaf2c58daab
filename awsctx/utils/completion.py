"""
Shell completion scripts for the awsctx command.
"""

import textwrap

__all__ = [
    'SUPPORTED_SHELLS',
    'SUBCOMMANDS',
    'completion_script',
]

SUBCOMMANDS = [
    "list-contexts",
    "use-context",
    "active-context",
    "auth",
    "refresh",
    "completion",
    "whoami",
]

_BASH = textwrap.dedent("""
    # awsctx completion for bash
    # Add this to your ~/.bashrc:  eval "$(PROG completion --shell bash)"
    _PROG_completion() {
        local cur prev
        cur="${COMP_WORDS[COMP_CWORD]}"
        prev="${COMP_WORDS[COMP_CWORD-1]}"

        # Complete subcommands
        if [ "$COMP_CWORD" -eq 1 ]; then
            COMPREPLY=( $(compgen -W "SUBCOMMANDS" -- "$cur") )
            return 0
        fi

        # Complete profile names
        if [ "$prev" = "--profile" ] || [ "$prev" = "-p" ]; then
            COMPREPLY=( $(compgen -W "$(PROG list-contexts --plain 2>/dev/null)" -- "$cur") )
            return 0
        fi

        if [ "$prev" = "--shell" ]; then
            COMPREPLY=( $(compgen -W "bash zsh fish" -- "$cur") )
            return 0
        fi
    }
    complete -F _PROG_completion PROG
    """)

_ZSH = textwrap.dedent("""
    #compdef PROG
    # awsctx completion for zsh
    # Add this to your ~/.zshrc:  eval "$(PROG completion --shell zsh)"
    _PROG() {
        local -a subcommands
        subcommands=(SUBCOMMANDS)

        if (( CURRENT == 2 )); then
            compadd -- $subcommands
            return
        fi

        case "${words[CURRENT-1]}" in
            --profile|-p)
                compadd -- $(PROG list-contexts --plain 2>/dev/null)
                ;;
            --shell)
                compadd -- bash zsh fish
                ;;
        esac
    }
    compdef _PROG PROG
    """)

_FISH = textwrap.dedent("""
    # awsctx completion for fish
    # Add this to ~/.config/fish/completions/PROG.fish
    complete -c PROG -f
    complete -c PROG -n "__fish_use_subcommand" -a "SUBCOMMANDS"
    complete -c PROG -s p -l profile -a "(PROG list-contexts --plain 2>/dev/null)"
    complete -c PROG -n "__fish_seen_subcommand_from completion" -l shell -a "bash zsh fish"
    """)

_SCRIPTS = {
    "bash": _BASH,
    "zsh": _ZSH,
    "fish": _FISH,
}

SUPPORTED_SHELLS = sorted(_SCRIPTS)


def completion_script(shell: str, prog: str = "awsctx") -> str:
    """
    Get the completion script for a shell.

    Args:
        shell: One of bash, zsh or fish
        prog: Name of the installed command

    Returns:
        str: Completion script to be evaluated by the shell

    Raises:
        ValueError: If the shell is not supported
    """
    if shell not in _SCRIPTS:
        raise ValueError(f"unsupported shell: {shell}, choose from {', '.join(SUPPORTED_SHELLS)}")

    script = _SCRIPTS[shell].replace("SUBCOMMANDS", " ".join(SUBCOMMANDS))
    return script.replace("PROG", prog).lstrip("\n")
