# core/reindex.py

"""
Перенумерация индексов журнала при перестановке и удалении активностей.

Журнал хранит позиции активностей, а не их id, поэтому любое изменение
порядка каталога должно сначала переписать индексы журнала по старому
порядку каталога и только потом применяться к самому каталогу.
"""

import logging
from typing import AbstractSet, Dict, Iterable, Optional

from core.ledger import DayLedger

logger = logging.getLogger(__name__)

IndexMapping = Dict[int, int]

def build_move_mapping(from_positions: Iterable[int], to_position: int, total_count: int) -> IndexMapping:
    """
    old -> new для перемещения from_positions перед to_position.

    to_position задаётся в координатах исходного списка (0..total_count):
    перемещаемые элементы вставляются перед элементом, стоявшим на
    to_position, с сохранением их взаимного порядка.
    """
    sources = sorted({p for p in from_positions if 0 <= p < total_count})
    order = list(range(total_count))
    if not sources:
        return {index: index for index in order}

    to_position = min(max(to_position, 0), total_count)
    remaining = [index for index in order if index not in sources]
    insert_at = to_position - sum(1 for p in sources if p < to_position)
    new_order = remaining[:insert_at] + sources + remaining[insert_at:]
    return {old: new for new, old in enumerate(new_order)}

def build_delete_mapping(position: int, total_count: int) -> IndexMapping:
    """Удалённая позиция не получает отображения, старшие сдвигаются вниз"""
    mapping: IndexMapping = {}
    for index in range(total_count):
        if index < position:
            mapping[index] = index
        elif index > position:
            mapping[index] = index - 1
    return mapping

def remap(
    ledger: DayLedger,
    from_positions: AbstractSet[int],
    to_position: Optional[int],
    total_count_before_move: int,
) -> bool:
    """
    Переписать журнал под перестановку каталога.

    to_position=None означает удаление: каждая позиция из from_positions
    теряет свои данные, старшие индексы сдвигаются вниз.
    """
    if to_position is None:
        mapping = {index: index for index in range(total_count_before_move)}
        # С конца, чтобы позиции ещё не удалённых элементов не смещались
        for position in sorted(from_positions, reverse=True):
            step = build_delete_mapping(position, total_count_before_move)
            mapping = {old: step[new] for old, new in mapping.items() if new in step}
            total_count_before_move -= 1
    else:
        mapping = build_move_mapping(from_positions, to_position, total_count_before_move)

    logger.debug(f"🔀 Перенумерация журнала: {mapping}")
    return ledger.apply_mapping(mapping)
