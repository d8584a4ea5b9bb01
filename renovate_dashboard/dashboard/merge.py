"""Merge method selection."""

from renovate_dashboard.models import MergeMethod

from .exceptions import NoSuitableMergeMethodError


def resolve_merge_method(
    commit_count: int | None,
    allow_rebase: bool,
    allow_squash: bool,
    allow_merge: bool,
    pr_number: int | None = None,
) -> MergeMethod:
    """Pick the merge method for a pull request.

    Single-commit PRs are rebased and multi-commit PRs squashed when the
    repository allows it; otherwise a merge commit is used. A single-commit PR
    in a repository without rebase support never falls back to squash.

    Args:
        commit_count: Number of commits on the PR (None counts as 0)
        allow_rebase: Repository allows rebase merging
        allow_squash: Repository allows squash merging
        allow_merge: Repository allows merge commits
        pr_number: PR number, used in the error message

    Returns:
        Merge method to send to the merge endpoint

    Raises:
        NoSuitableMergeMethodError: If no allowed method applies
    """
    commits = commit_count or 0

    if commits == 1 and allow_rebase:
        return MergeMethod.REBASE
    if commits > 1 and allow_squash:
        return MergeMethod.SQUASH
    if allow_merge:
        return MergeMethod.MERGE

    raise NoSuitableMergeMethodError(pr_number)
