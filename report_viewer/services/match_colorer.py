"""Greedy color assignment for match highlights.

Matches are highlighted in both compared files and listed by size. Two
matches next to each other in the first file, in the second file, or in the
size-sorted list must not share a color. Colors are picked greedily in input
order, rotating a cursor over the palette, and the colorer gives up instead
of backtracking when a match has no free color left.
"""
from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from report_viewer.core.errors import ColoringInfeasibleError, InvalidInputError
from report_viewer.core.logging import LogEvent, get_logger
from report_viewer.models.match import Match

logger = get_logger(__name__)


class MatchColorer:
    """Assign palette indices to matches.

    A match is addressed by its handle, the index it has in the sequence
    given to the constructor. Orderings are kept as lists of handles so the
    same match can be located in every view regardless of its field values.
    """

    def __init__(self, matches: Sequence[Match]):
        self.matches: List[Match] = list(matches)
        self.by_first_file = self._ordering(lambda m: (m.first_file, m.start_in_first))
        self.by_second_file = self._ordering(lambda m: (m.second_file, m.start_in_second))
        self.by_size = self._ordering(lambda m: m.tokens)
        self._orderings: Tuple[List[int], ...] = (
            self.by_first_file,
            self.by_second_file,
            self.by_size,
        )
        self._positions: Tuple[Dict[int, int], ...] = tuple(
            {handle: position for position, handle in enumerate(ordering)}
            for ordering in self._orderings
        )

    def _ordering(self, key) -> List[int]:
        # sorted() is stable, ties keep input order
        return sorted(range(len(self.matches)), key=lambda handle: key(self.matches[handle]))

    def assign(self, palette_size: int) -> Dict[int, int]:
        """Return a handle -> color mapping covering every match.

        Raises:
            InvalidInputError: ``palette_size`` is smaller than one.
            ColoringInfeasibleError: every color is taken by a neighbour of
                some match.
        """
        if palette_size < 1:
            raise InvalidInputError("palette size must be at least 1", field="palette_size", value=palette_size)

        logger.debug(LogEvent.COLORING_STARTED, matches=len(self.matches), palette_size=palette_size)

        colors: Dict[int, int] = {}
        cursor = 0
        for handle in range(len(self.matches)):
            start = cursor
            while not self._is_admissible(handle, cursor, colors):
                cursor = (cursor + 1) % palette_size
                if cursor == start:
                    logger.warning(
                        LogEvent.COLORING_FAILED,
                        matches=len(self.matches),
                        palette_size=palette_size,
                        match_handle=handle,
                    )
                    raise ColoringInfeasibleError(palette_size, handle)
            colors[handle] = cursor
            cursor = (cursor + 1) % palette_size

        logger.debug(
            LogEvent.COLORING_COMPLETED,
            matches=len(self.matches),
            palette_size=palette_size,
            colors_used=len(set(colors.values())),
        )
        return colors

    def colored(self, palette_size: int) -> List[Match]:
        """Colored copies of the matches, ordered by ascending token count."""
        colors = self.assign(palette_size)
        return [self.matches[handle].with_color(colors[handle]) for handle in self.by_size]

    def _is_admissible(self, handle: int, color: int, colors: Dict[int, int]) -> bool:
        for ordering, positions in zip(self._orderings, self._positions):
            position = positions[handle]
            if position > 0 and colors.get(ordering[position - 1]) == color:
                return False
            if position < len(ordering) - 1 and colors.get(ordering[position + 1]) == color:
                return False
        return True


def color_matches(matches: Sequence[Match], palette_size: int) -> List[Match]:
    """Color ``matches`` with ``palette_size`` colors, see :class:`MatchColorer`."""
    return MatchColorer(matches).colored(palette_size)


__all__ = ["MatchColorer", "color_matches"]
