"""Skyline bottom-left / best-fit rectangle packing into a fixed target."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Iterable, Optional

MAX_COORD = 0xFFFF
_SENTINEL_Y = 65535


class Heuristic(enum.IntEnum):
    """Placement heuristic used by the skyline packer."""

    SKYLINE_BL_SORT_HEIGHT = 0
    SKYLINE_DEFAULT = 0
    SKYLINE_BF_SORT_HEIGHT = 1


@dataclass
class Rect:
    """A rectangle to pack; x, y and was_packed are filled in by the packer."""

    id: int = 0
    w: int = 0
    h: int = 0
    x: int = 0
    y: int = 0
    was_packed: bool = False


@dataclass
class _Node:
    x: int
    y: int


@dataclass
class _Placement:
    index: Optional[int]
    x: int
    y: int


class RectPacker:
    """Packs rectangles into a width x height area using a skyline."""

    def __init__(self, width: int, height: int, num_nodes: int) -> None:
        if width > MAX_COORD or height > MAX_COORD:
            raise ValueError("width and height must not exceed 65535")
        if num_nodes < 1:
            raise ValueError("num_nodes must be at least 1")
        self.width = width
        self.height = height
        self.num_nodes = num_nodes
        self.heuristic = Heuristic.SKYLINE_DEFAULT
        self.align = 1
        self._skyline = [_Node(0, 0), _Node(width, _SENTINEL_Y)]
        self.set_allow_out_of_mem(False)

    @property
    def _free_nodes(self) -> int:
        # the two initial skyline nodes do not come from the node budget
        return self.num_nodes + 2 - len(self._skyline)

    def set_heuristic(self, heuristic: Heuristic) -> None:
        """Select the placement heuristic."""
        if heuristic not in (
            Heuristic.SKYLINE_BL_SORT_HEIGHT,
            Heuristic.SKYLINE_BF_SORT_HEIGHT,
        ) or isinstance(heuristic, bool):
            raise ValueError(f"unknown heuristic: {heuristic!r}")
        self.heuristic = Heuristic(heuristic)

    def set_allow_out_of_mem(self, allow_out_of_mem: bool) -> None:
        """Choose between exact widths (may run out of nodes) and quantized widths."""
        if allow_out_of_mem:
            self.align = 1
        else:
            self.align = (self.width + self.num_nodes - 1) // self.num_nodes

    def _find_min_y(self, first: int, x0: int, width: int) -> tuple[int, int]:
        sky = self._skyline
        x1 = x0 + width
        min_y = 0
        waste = 0
        visited = 0
        i = first
        while sky[i].x < x1:
            node, nxt = sky[i], sky[i + 1]
            if node.y > min_y:
                waste += visited * (node.y - min_y)
                min_y = node.y
                if node.x < x0:
                    visited += nxt.x - x0
                else:
                    visited += nxt.x - node.x
            else:
                under = nxt.x - node.x
                if under + visited > width:
                    under = width - visited
                waste += under * (min_y - node.y)
                visited += under
            i += 1
        return min_y, waste

    def _find_best_pos(self, width: int, height: int) -> _Placement:
        width = width + self.align - 1
        width -= width % self.align

        if width > self.width or height > self.height:
            return _Placement(None, 0, 0)

        sky = self._skyline
        best: Optional[int] = None
        best_y = 1 << 30
        best_waste = 1 << 30

        i = 0
        while sky[i].x + width <= self.width:
            y, waste = self._find_min_y(i, sky[i].x, width)
            if self.heuristic == Heuristic.SKYLINE_BL_SORT_HEIGHT:
                if y < best_y:
                    best_y = y
                    best = i
            elif y + height <= self.height:
                if y < best_y or (y == best_y and waste < best_waste):
                    best_y = y
                    best_waste = waste
                    best = i
            i += 1

        best_x = 0 if best is None else sky[best].x

        if self.heuristic == Heuristic.SKYLINE_BF_SORT_HEIGHT:
            tail = 0
            node = 0
            while sky[tail].x < width:
                tail += 1
            while tail < len(sky):
                xpos = sky[tail].x - width
                while sky[node + 1].x <= xpos:
                    node += 1
                y, waste = self._find_min_y(node, xpos, width)
                if y + height <= self.height and y <= best_y:
                    if (
                        y < best_y
                        or waste < best_waste
                        or (waste == best_waste and xpos < best_x)
                    ):
                        best_x = xpos
                        best_y = y
                        best_waste = waste
                        best = node
                tail += 1

        return _Placement(best, best_x, best_y)

    def _pack_rectangle(self, width: int, height: int) -> Optional[tuple[int, int]]:
        res = self._find_best_pos(width, height)
        if (
            res.index is None
            or res.y + height > self.height
            or self._free_nodes <= 0
        ):
            return None

        sky = self._skyline
        new_node = _Node(res.x, res.y + height)
        start = res.index + 1 if sky[res.index].x < res.x else res.index
        right = res.x + width

        cur = start
        while cur + 1 < len(sky) and sky[cur + 1].x <= right:
            cur += 1

        if sky[cur].x < right:
            sky[cur].x = right
        self._skyline = sky[:start] + [new_node] + sky[cur:]
        return res.x, res.y

    def pack_rects(self, rects: Iterable[Rect]) -> bool:
        """Place the rectangles in place; return True if every one was packed."""
        rects = list(rects)
        order = sorted(rects, key=lambda r: (-r.h, -r.w))

        for rect in order:
            if rect.w == 0 or rect.h == 0:
                rect.x = rect.y = 0
                continue
            pos = self._pack_rectangle(rect.w, rect.h)
            if pos is None:
                rect.x = rect.y = MAX_COORD
            else:
                rect.x, rect.y = pos

        for rect in rects:
            rect.was_packed = not (rect.x == MAX_COORD and rect.y == MAX_COORD)
        return all(rect.was_packed for rect in rects)