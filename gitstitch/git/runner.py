"""Git command runner and repository utilities.

Contains:
- _run_git_command: Run a git command and return its output
- get_repo_root: Get the root directory of the current git repository
"""

import os
import subprocess
from pathlib import Path
from typing import Optional, Union

from gitstitch.git.exceptions import GitError

# Object names, paths and messages are passed through byte-exact.
_ENCODING = "utf-8"
_ERRORS = "surrogateescape"


def _decode(value: Union[bytes, str, None]) -> str:
    if value is None:
        return ""
    if isinstance(value, bytes):
        return value.decode(_ENCODING, _ERRORS)
    return value


def _run_git_command(
    args: list[str],
    cwd: Optional[Path] = None,
    input: Union[bytes, str, None] = None,
    env: Optional[dict[str, str]] = None,
    strip: bool = True,
) -> str:
    """Run a git command and return its output.

    Args:
        args: List of arguments to pass to git.
        cwd: Directory to run git in (defaults to the current directory).
        input: Data written to git's stdin.
        env: Extra environment variables layered over os.environ.
        strip: Strip surrounding whitespace from the output.

    Returns:
        The stdout of the git command.

    Raises:
        GitError: If the command fails.
    """
    if isinstance(input, str):
        input = input.encode(_ENCODING, _ERRORS)

    run_env = None
    if env:
        run_env = dict(os.environ)
        run_env.update(env)

    try:
        result = subprocess.run(
            ["git"] + args,
            input=input,
            capture_output=True,
            check=True,
            cwd=cwd,
            env=run_env,
        )
    except subprocess.CalledProcessError as e:
        raise GitError(f"Git command failed: git {' '.join(args)}\n{_decode(e.stderr).strip()}")
    except FileNotFoundError:
        raise GitError("Git is not installed or not in PATH.")

    output = _decode(result.stdout)
    return output.strip() if strip else output


def get_repo_root(cwd: Optional[Path] = None) -> Path:
    """Get the root directory of the current git repository.

    Returns:
        Path to the repository root.

    Raises:
        GitError: If not in a git repository.
    """
    try:
        root = _run_git_command(["rev-parse", "--show-toplevel"], cwd=cwd)
        return Path(root)
    except GitError:
        raise GitError("Not in a git repository. Please run this command from within a git repo.")
