"""EventBus - 엔티티/서비스 → 외부 시스템 이벤트 통지

규칙:
- 엔티티는 상태 변경이 확정된 뒤에만 이벤트를 발행한다
- 엔티티는 구독자를 알지 못한다 (EventPort만 주입받음)
- 전파 깊이 최대 MAX_DEPTH 단계
- 한 전파 체인 안에서 같은 이벤트 객체 재발행 금지 (내용이 같은 새 이벤트는 별개의 변경)
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol
from collections import defaultdict

from guildsim.core.logging import get_logger

logger = get_logger(__name__)

MAX_DEPTH = 5  # 한 번의 발행에서 이벤트 전파 최대 깊이


@dataclass(frozen=True)
class GameEvent:
    """불변 이벤트 레코드

    Args:
        event_type: 이벤트 유형 (EventTypes 상수)
        data: 이벤트 데이터 (ID·수치 위주, 엔티티 객체 금지)
        source: 발행한 엔티티/서비스 이름
    """

    event_type: str
    data: Mapping[str, Any] = field(default_factory=dict)
    source: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "data", MappingProxyType(dict(self.data)))


# 핸들러 타입: GameEvent를 받는 callable
EventHandler = Callable[[GameEvent], None]


class EventPort(Protocol):
    """엔티티가 의존하는 발행 인터페이스. 반환값 없음, 전달 보장 없음."""

    def emit(self, event: GameEvent) -> None: ...


def publish(
    bus: Optional[EventPort],
    event_type: str,
    source: str,
    **data: Any,
) -> None:
    """bus가 주입된 경우에만 발행. 미주입 엔티티는 조용히 건너뛴다."""
    if bus is None:
        return
    bus.emit(GameEvent(event_type=event_type, data=data, source=source))


class EventBus:
    """동기식 이벤트 버스

    사용 패턴:
        bus = EventBus()
        bus.subscribe("debt_payment", ledger.handle_debt_payment)
        bus.emit(GameEvent(event_type="debt_payment", data={"amount": 100}, source="debt"))
    """

    def __init__(self) -> None:
        self._handlers: Dict[str, List[EventHandler]] = defaultdict(list)
        self._current_depth: int = 0
        # id(event) → event. 체인 동안 객체를 붙잡아 id 재사용 방지
        self._emitted_in_chain: Dict[int, GameEvent] = {}

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 등록"""
        self._handlers[event_type].append(handler)
        logger.debug(f"EventBus 구독: {event_type} → {handler.__qualname__}")

    def unsubscribe(self, event_type: str, handler: EventHandler) -> None:
        """이벤트 구독 해제"""
        if event_type in self._handlers:
            try:
                self._handlers[event_type].remove(handler)
                logger.debug(
                    f"EventBus 구독 해제: {event_type} → {handler.__qualname__}"
                )
            except ValueError:
                logger.warning(f"핸들러 미등록: {event_type} → {handler.__qualname__}")

    def emit(self, event: GameEvent) -> None:
        """이벤트 발행. 등록된 핸들러를 동기 호출.

        안전장치:
        1. 전파 깊이 MAX_DEPTH 초과 시 무시
        2. 같은 체인 안에서 같은 이벤트 객체 재발행 시 무시

        최상위 발행(depth 0)은 항상 새 체인을 시작한다.
        """
        if self._current_depth >= MAX_DEPTH:
            logger.warning(
                f"EventBus 전파 깊이 초과 ({MAX_DEPTH}): "
                f"{event.source}:{event.event_type} 무시됨"
            )
            return

        if self._current_depth == 0:
            self._emitted_in_chain.clear()

        if id(event) in self._emitted_in_chain:
            logger.warning(f"EventBus 중복 이벤트 차단: {event.source}:{event.event_type}")
            return

        self._emitted_in_chain[id(event)] = event

        handlers = list(self._handlers.get(event.event_type, []))
        if not handlers:
            logger.debug(f"EventBus: {event.event_type} 구독자 없음")
            return

        logger.debug(
            f"EventBus 전파: {event.event_type} (source={event.source}, "
            f"depth={self._current_depth}, handlers={len(handlers)})"
        )

        self._current_depth += 1
        try:
            for handler in handlers:
                try:
                    handler(event)
                except Exception:
                    logger.exception(
                        f"EventBus 핸들러 에러: {handler.__qualname__} "
                        f"(event={event.event_type})"
                    )
        finally:
            self._current_depth -= 1

    def reset_chain(self) -> None:
        """중복 추적 초기화."""
        self._emitted_in_chain.clear()
        self._current_depth = 0

    def clear(self) -> None:
        """모든 구독 해제 (테스트용)"""
        self._handlers.clear()
        self.reset_chain()

    @property
    def handler_count(self) -> int:
        """등록된 총 핸들러 수"""
        return sum(len(h) for h in self._handlers.values())

