"""
Report Cache
Per-provider markdown fragments keyed by provider name and inputs
"""

from typing import Protocol

from cost_report.schemas.report import SelectedProvider


class ReportCache(Protocol):
    """Anything with get/set/has (and clear) can back the report pipeline"""

    def get(self, key: str) -> str | None: ...

    def set(self, key: str, fragment: str) -> None: ...

    def has(self, key: str) -> bool: ...

    def clear(self) -> int: ...


class InMemoryReportCache:
    """Unbounded dict, lives as long as the process"""

    def __init__(self):
        self._entries: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._entries.get(key)

    def set(self, key: str, fragment: str) -> None:
        self._entries[key] = fragment

    def has(self, key: str) -> bool:
        return key in self._entries

    def clear(self) -> int:
        count = len(self._entries)
        self._entries.clear()
        return count

    def __len__(self) -> int:
        return len(self._entries)


def cache_key(selection: SelectedProvider) -> str:
    return selection.provider.name + selection.serialized_inputs()


# Process-wide default, see api.deps.get_report_cache
report_cache = InMemoryReportCache()
