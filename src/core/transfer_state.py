"""
Transfer State: 요청 단위 key/value 캐시.

역할:
- 서버 렌더 중 Data Fetch Facade가 채움
- 문서에 JSON으로 직렬화되어 클라이언트로 전달
- 클라이언트 시작 시 1회 복원, 이후 서버와 동기화되지 않음

규칙:
- render pass당 인스턴스 1개 (전역/풀링 금지, 락 없음)
- 키는 스토어 내에서 유일, 같은 키 set은 last write wins
- 값은 JSON 직렬화 가능해야 함 (set 시점에 정규화)
"""

import copy
import json
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# </script> 조기 종료 및 HTML 해석 방지
_SCRIPT_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


@dataclass(frozen=True)
class StateKey(Generic[T]):
    """
    타입이 붙은 transfer state 키.

    문자열 키와 동일하게 취급된다.
    """
    name: str

    def __str__(self) -> str:
        return self.name


def make_state_key(name: str) -> StateKey[Any]:
    """StateKey 생성. 이름은 애플리케이션 전체에서 유일해야 함."""
    if not name:
        raise ValueError("state key name must not be empty")
    return StateKey(name)


def key_name(key: "StateKey[Any] | str") -> str:
    return key.name if isinstance(key, StateKey) else key


class TransferState:
    """
    직렬화 가능한 요청 단위 캐시.

    Usage:
        state = TransferState()
        state.set("products", [...])
        html_safe = state.to_json()
        restored = TransferState.from_json(html_safe)
    """

    def __init__(self, entries: dict[str, Any] | None = None) -> None:
        self._store: dict[str, Any] = {}
        for name, value in (entries or {}).items():
            self.set(name, value)

    def has_key(self, key: "StateKey[Any] | str") -> bool:
        return key_name(key) in self._store

    def get(self, key: "StateKey[T] | str", fallback: T) -> T:
        """
        값 조회. 키가 없으면 fallback 그대로 반환 (예외 없음).

        반환값은 복사본: 호출자가 수정해도 스토어에 반영되지 않는다.
        """
        name = key_name(key)
        if name not in self._store:
            return fallback
        value: T = copy.deepcopy(self._store[name])
        return value

    def set(self, key: "StateKey[T] | str", value: T) -> None:
        """
        값 저장 (last write wins).

        JSON 왕복 형태로 정규화해서 저장하므로, 저장된 값은
        직렬화/역직렬화 후에도 동일하다.

        Raises:
            TypeError: JSON으로 직렬화할 수 없는 값 (NaN/Inf 포함)
        """
        name = key_name(key)
        try:
            encoded = json.dumps(value, allow_nan=False)
        except (TypeError, ValueError) as e:
            raise TypeError(f"transfer state value for {name!r} is not JSON-serializable: {e}") from e
        self._store[name] = json.loads(encoded)

    def remove(self, key: "StateKey[Any] | str") -> None:
        self._store.pop(key_name(key), None)

    def keys(self) -> list[str]:
        return list(self._store)

    @property
    def is_empty(self) -> bool:
        return not self._store

    def __len__(self) -> int:
        return len(self._store)

    def __contains__(self, key: object) -> bool:
        if isinstance(key, StateKey | str):
            return self.has_key(key)
        return False

    # =========================================================================
    # Serialization
    # =========================================================================

    def to_json(self) -> str:
        """
        <script type="application/json"> 안에 그대로 넣을 수 있는 JSON.

        <, >, & 는 \\uXXXX로 이스케이프 (JSON으로는 동일한 값).
        """
        text = json.dumps(self._store, ensure_ascii=False, separators=(",", ":"))
        for char, escaped in _SCRIPT_ESCAPES.items():
            text = text.replace(char, escaped)
        return text

    @classmethod
    def from_json(cls, text: str) -> "TransferState":
        """
        직렬화된 스토어 복원.

        빈 문자열은 빈 스토어로 취급.

        Raises:
            ValueError: JSON이 아니거나 최상위가 object가 아님
        """
        if not text.strip():
            return cls()
        data = json.loads(text)
        if not isinstance(data, dict):
            raise ValueError("transfer state payload must be a JSON object")
        return cls(data)

    def __repr__(self) -> str:
        return f"TransferState(keys={self.keys()!r})"
