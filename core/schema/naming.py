# ============================================================================
# CLAUDE CONTEXT - NAMING CONVENTION HEURISTICS
# ============================================================================
# EPOCH: 1 - SCHEMA COMPILER
# STATUS: Core - Column-name based index and relationship inference
# PURPOSE: Decide which columns get secondary indexes and which look like
#          foreign keys, from their names alone
# LAST_REVIEWED: 17 OCT 2026
# EXPORTS: NamingRule, INDEX_RULES, FOREIGN_KEY_SUFFIX, is_index_candidate,
#          candidate_table_names, infer_referenced_table
# ============================================================================
"""
Naming Convention Heuristics

Neither indexes nor relationships are declared on descriptors; both are
guessed from column names.

Index rule table (any match indexes the column):

    | Kind     | Pattern | Matches             |
    |----------|---------|---------------------|
    | suffix   | _id     | owner_id, user_id   |
    | contains | name    | username, surname   |
    | contains | date    | update_date         |

False positives (e.g. `surname`) are accepted.

Foreign key rule: a column ending in `_id` references the table named by the
remaining prefix (`project_id` -> `project`). Failing that, the prefix minus
one trailing `s` is tried (`users_id` -> `user`), or, for a prefix without
one, the prefix plus `s` (`project_id` -> `projects`). Table names must match
exactly; otherwise nothing is inferred.
"""

from dataclasses import dataclass
from typing import Collection, List, Optional


@dataclass(frozen=True)
class NamingRule:
    """A single suffix or substring match on a column name."""
    kind: str  # 'suffix' or 'contains'
    pattern: str

    def matches(self, column_name: str) -> bool:
        if self.kind == "suffix":
            return column_name.endswith(self.pattern)
        if self.kind == "contains":
            return self.pattern in column_name
        raise ValueError(f"Unknown naming rule kind: {self.kind}")


INDEX_RULES = (
    NamingRule("suffix", "_id"),
    NamingRule("contains", "name"),
    NamingRule("contains", "date"),
)

FOREIGN_KEY_SUFFIX = "_id"


def is_index_candidate(column_name: str) -> bool:
    """True if any index rule matches the column name."""
    return any(rule.matches(column_name) for rule in INDEX_RULES)


def candidate_table_names(column_name: str) -> List[str]:
    """
    Possible referenced table names for a column, in lookup order.

    Returns [] if the column does not end in `_id`.
    """
    if not column_name.endswith(FOREIGN_KEY_SUFFIX):
        return []

    base = column_name[: -len(FOREIGN_KEY_SUFFIX)]
    candidates = [base]
    if base.endswith("s"):
        candidates.append(base[:-1])
    else:
        candidates.append(base + "s")
    return candidates


def infer_referenced_table(column_name: str, table_names: Collection[str]) -> Optional[str]:
    """
    Table a column probably references, or None.

    Args:
        column_name: Column to inspect
        table_names: Registered table names

    Returns:
        The first candidate name present in table_names
    """
    for candidate in candidate_table_names(column_name):
        if candidate in table_names:
            return candidate
    return None


__all__ = [
    "NamingRule",
    "INDEX_RULES",
    "FOREIGN_KEY_SUFFIX",
    "is_index_candidate",
    "candidate_table_names",
    "infer_referenced_table",
]
