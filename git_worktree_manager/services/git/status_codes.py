"""Translation of git status codes into file status labels.

Input is the machine-readable output of
``git status --porcelain=v1 -z --untracked-files=all``. Each record is
``XY PATH`` followed by NUL, where X is the index (staged) column and Y the
working tree column. Rename and copy records are followed by a second NUL
terminated field holding the original path.
"""

from typing import List, Tuple

from git_worktree_manager.models.status import FileState, FileStatus

STATUS_ARGS = ("status", "--porcelain=v1", "-z", "--untracked-files=all")

CONFLICT_CODES = frozenset({"DD", "AU", "UD", "UA", "DU", "AA", "UU"})
UNTRACKED_CODE = "??"
IGNORED_CODE = "!!"

INDEX_STATES = {
    "A": FileState.ADDED,
    "M": FileState.MODIFIED,
    "D": FileState.DELETED,
    "R": FileState.RENAMED,
    "C": FileState.ADDED,  # a copy introduces a new path
    "T": FileState.TYPECHANGE,
}

WORKTREE_STATES = {
    "A": FileState.ADDED,  # intent-to-add
    "M": FileState.MODIFIED,
    "D": FileState.DELETED,
    "R": FileState.RENAMED,
    "T": FileState.TYPECHANGE,
}


def classify(code: str) -> List[Tuple[FileState, bool]]:
    """
    Map a two-character status code to (label, staged) pairs.

    Args:
        code: The XY status code

    Returns:
        Zero, one or two (FileState, staged) pairs. Staged entries come first.
    """
    if code in CONFLICT_CODES:
        return [(FileState.CONFLICTED, False)]
    if code == UNTRACKED_CODE:
        return [(FileState.UNTRACKED, False)]
    if code == IGNORED_CODE:
        return []

    index_code, worktree_code = code[0], code[1]
    result = []
    if index_code in INDEX_STATES:
        result.append((INDEX_STATES[index_code], True))
    if worktree_code in WORKTREE_STATES:
        result.append((WORKTREE_STATES[worktree_code], False))
    return result


def parse_porcelain_status(output: str) -> List[FileStatus]:
    """
    Parse NUL separated porcelain status output into FileStatus records.

    Args:
        output: Raw output of ``git status --porcelain=v1 -z``

    Returns:
        FileStatus list in the order git reported the paths
    """
    files: List[FileStatus] = []
    records = output.split("\0")
    i = 0
    while i < len(records):
        record = records[i]
        i += 1
        # Shortest valid record is "XY p"
        if len(record) < 4:
            continue

        code, path = record[:2], record[3:]
        if code[0] in "RC" or code[1] in "RC":
            i += 1  # original path of the rename/copy

        for state, staged in classify(code):
            files.append(FileStatus(path=path, status=state, staged=staged))

    return files
