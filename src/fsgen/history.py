"""
Keep generations in git so a deployer can tell whether anything changed.

The output directory becomes a git repository; each generation is committed
only when its tree differs from HEAD.
"""

import logging
from pathlib import Path
from typing import List

import git

logger = logging.getLogger(__name__)

AUTHOR = git.Actor("fsgen", "fsgen@localhost")


def _open_repo(output_dir: Path) -> git.Repo:
    if (output_dir / ".git").exists():
        return git.Repo(output_dir)
    logger.info("initialising git repository in %s", output_dir)
    return git.Repo.init(output_dir)


def changed_paths(repo: git.Repo) -> List[str]:
    """Paths that differ between the working tree and HEAD (all files if there is no HEAD)."""
    if not repo.head.is_valid():
        return sorted(repo.untracked_files)
    paths = {d.a_path or d.b_path for d in repo.head.commit.diff(None)}
    paths.update(repo.untracked_files)
    return sorted(paths)


def commit_output(output_dir: Path, message: str = "fsgen generation") -> List[str]:
    """Commit the output tree. Returns changed paths; empty when identical to the last commit."""
    output_dir = Path(output_dir)
    repo = _open_repo(output_dir)
    changes = changed_paths(repo)
    if not changes:
        logger.info("generation unchanged; nothing to commit")
        return []
    repo.git.add(A=True)
    repo.index.commit(message, author=AUTHOR, committer=AUTHOR)
    logger.info("committed %d changed paths", len(changes))
    return changes
