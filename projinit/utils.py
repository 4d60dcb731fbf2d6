"""
Shared utility functions for projinit: running commands and querying git.
"""
import logging
import re
import subprocess

logger = logging.getLogger(__name__)

GITHUB_URL_RE = re.compile(r"^.+(?:@|://)(github\.com)[:/](.+?)(?:\.git|/)?$")


def run_command(command, cwd=".", capture_output=False, check=True, log_stderr=True):
    """
    Runs a shell command and logs the output.

    Args:
        command (str): The command to run.
        cwd (str): The working directory.
        capture_output (bool): If True, return stdout.
        check (bool): If True, raise CalledProcessError on non-zero exit codes.
        log_stderr (bool): If False, do not log stderr as an error.

    Returns:
        str: The command's stdout if capture_output is True, otherwise None.
    """
    logger.debug(f"Running command in '{cwd}': {command}")
    try:
        result = subprocess.run(
            command,
            shell=True,
            capture_output=True,
            text=True,
            cwd=cwd,
            check=False,
            encoding='utf-8'
        )
    except OSError as e:
        logger.error(f"An unexpected error occurred while running command '{command}': {e}")
        if check:
            raise
        return None

    if result.stdout and result.stdout.strip():
        logger.debug(result.stdout.strip())

    if result.returncode != 0:
        if log_stderr and result.stderr and result.stderr.strip():
            logger.error(result.stderr.strip())
        if check:
            raise subprocess.CalledProcessError(
                result.returncode, command, output=result.stdout, stderr=result.stderr
            )
        return None

    return result.stdout.strip() if capture_output else None


def git_origin(cwd="."):
    """
    Gets the URL of the "origin" remote of the repository at ``cwd``.

    Returns:
        str: The URL, or None if there is no origin (or no repository).
    """
    output = run_command("git remote -v", cwd=cwd, capture_output=True, check=False, log_stderr=False)
    if not output:
        return None
    for line in output.splitlines():
        if re.match(r"^origin\s", line):
            return line.split()[1]
    return None


def git_config(key, cwd="."):
    """Gets a value from the git config, or None if it is not set."""
    value = run_command(f"git config --get {key}", cwd=cwd, capture_output=True, check=False, log_stderr=False)
    return value or None


def git_describe(cwd="."):
    """Gets the most recent tag reachable from HEAD, or None."""
    value = run_command("git describe --tags", cwd=cwd, capture_output=True, check=False, log_stderr=False)
    return value or None


def github_url(uri, suffix=None):
    """
    Generates a GitHub web URL from a GitHub repository URI.

    Args:
        uri (str): Any of the git@, git://, ssh:// or https:// forms.
        suffix (str): Optional path to append (e.g. "issues").

    Returns:
        str: The https URL, or None if ``uri`` is not a GitHub URI.
    """
    if not uri:
        return None
    match = GITHUB_URL_RE.match(uri)
    if not match:
        return None
    url = f"https://{match.group(1)}/{match.group(2)}"
    if suffix:
        url += "/" + suffix.lstrip("/")
    return url


def parse_repo_url(url):
    """
    Parses a GitHub URL to extract the owner and repository name.

    Returns:
        tuple: A tuple (owner, repo) or (None, None) if parsing fails.
    """
    web_url = github_url(url)
    if not web_url:
        return None, None
    parts = web_url.split("/")
    return parts[-2], parts[-1]
