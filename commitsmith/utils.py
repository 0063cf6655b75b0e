from commitsmith.schemas import Commit


def build_commit_line(commit: Commit) -> str:
    """Render *commit* as ``kind(scope): message``, dropping an empty scope."""

    line = commit.kind.strip()

    scope = commit.scope.strip()
    if scope:
        line += f"({scope})"

    return f"{line}: {commit.message.strip()}"
