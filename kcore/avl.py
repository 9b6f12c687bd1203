"""An AVL tree that keeps subtree sizes, so lookups also report ranks.

Items are ordered with ``<``. Two items are the same when neither is less
than the other; a tree holds at most one of them.
"""

from typing import Any, Iterator, List, Optional, Tuple


class _Node:
    __slots__ = ("data", "balance", "size", "p")

    def __init__(self, data: Any):
        self.data = data
        self.balance = 0
        self.size = 1
        self.p: List[Optional["_Node"]] = [None, None]


def _cmp(x: Any, y: Any) -> int:
    return (y < x) - (x < y)


def _child_size(node: _Node, direction: int) -> int:
    child = node.p[direction]
    return child.size if child is not None else 0


def _rotate1(p: _Node, direction: int) -> _Node:
    """One rotation: (a,(b,c)q)p => ((a,b)p,c)q; direction 0 rotates left."""
    opp = 1 - direction
    q = p.p[opp]
    size_p = p.size
    p.size -= q.size - _child_size(q, direction)
    q.size = size_p
    p.p[opp] = q.p[direction]
    q.p[direction] = p
    return q


def _rotate2(p: _Node, direction: int) -> _Node:
    """Two rotations: (a,((b,c)r,d)q)p => ((a,b)p,(c,d)q)r."""
    opp = 1 - direction
    q = p.p[opp]
    r = q.p[direction]
    size_r_dir = _child_size(r, direction)
    r.size = p.size
    p.size -= q.size - size_r_dir
    q.size -= size_r_dir + 1
    p.p[opp] = r.p[direction]
    r.p[direction] = p
    q.p[direction] = r.p[opp]
    r.p[opp] = q
    b1 = 1 if direction == 0 else -1
    if r.balance == b1:
        q.balance, p.balance = 0, -b1
    elif r.balance == 0:
        q.balance = p.balance = 0
    else:
        q.balance, p.balance = b1, 0
    r.balance = 0
    return r


def _walk(stack: List[_Node]) -> Iterator[Any]:
    while stack:
        node = stack.pop()
        yield node.data
        p = node.p[1]
        while p is not None:
            stack.append(p)
            p = p.p[0]


class AvlTree:
    """A balanced binary search tree with order statistics."""

    def __init__(self):
        self._root: Optional[_Node] = None

    def __len__(self) -> int:
        return self._root.size if self._root is not None else 0

    def __iter__(self) -> Iterator[Any]:
        stack: List[_Node] = []
        p = self._root
        while p is not None:
            stack.append(p)
            p = p.p[0]
        return _walk(stack)

    def __contains__(self, item: Any) -> bool:
        return self.find(item)[0] is not None

    def find(self, item: Any) -> Tuple[Optional[Any], int]:
        """Return the stored item equal to ``item`` (or None) and the number
        of stored items less than or equal to ``item``."""
        p = self._root
        cnt = 0
        while p is not None:
            c = _cmp(item, p.data)
            if c >= 0:
                cnt += _child_size(p, 0) + 1
            if c < 0:
                p = p.p[0]
            elif c > 0:
                p = p.p[1]
            else:
                break
        return (p.data if p is not None else None), cnt

    def insert(self, item: Any) -> Tuple[Any, bool, int]:
        """Insert ``item`` unless an equal one is present.

        Returns the stored item, whether it was newly inserted, and the number
        of items less than or equal to ``item`` before the insertion.
        """
        stack: List[int] = []
        path: List[_Node] = []
        bp, bq = self._root, None
        p, q = bp, None
        which = 0
        cnt = 0
        while p is not None:
            c = _cmp(item, p.data)
            if c >= 0:
                cnt += _child_size(p, 0) + 1
            if c == 0:
                return p.data, False, cnt
            if p.balance != 0:
                bq, bp = q, p
                stack = []
            which = 1 if c > 0 else 0
            stack.append(which)
            path.append(p)
            q, p = p, p.p[which]
        x = _Node(item)
        if q is None:
            self._root = x
        else:
            q.p[which] = x
        if bp is None:
            return item, True, cnt
        for node in path:
            node.size += 1
        p = bp
        for step in stack:
            p.balance += 1 if step else -1
            p = p.p[step]
        if -2 < bp.balance < 2:
            return item, True, cnt
        which = 1 if bp.balance < 0 else 0
        b1 = 1 if which == 0 else -1
        q = bp.p[1 - which]
        if q.balance == b1:
            r = _rotate1(bp, which)
            q.balance = bp.balance = 0
        else:
            r = _rotate2(bp, which)
        if bq is None:
            self._root = r
        else:
            bq.p[0 if bp is bq.p[0] else 1] = r
        return item, True, cnt

    def erase(self, item: Any) -> Tuple[Optional[Any], int]:
        """Remove the item equal to ``item``.

        Returns the removed item and the number of items less than or equal
        to it before removal, or ``(None, 0)`` if absent.
        """
        return self._erase(item, False)

    def erase_first(self) -> Any:
        """Remove and return the smallest item; IndexError if empty."""
        if self._root is None:
            raise IndexError("erase_first from an empty tree")
        return self._erase(None, True)[0]

    def _erase(self, item: Any, first: bool) -> Tuple[Optional[Any], int]:
        fake = _Node(None)
        fake.p[0] = self._root
        path: List[_Node] = []
        dirs: List[int] = []
        cnt = 0
        if not first:
            c = -1
            p = fake
            while c:
                which = 1 if c > 0 else 0
                if c > 0:
                    cnt += _child_size(p, 0) + 1
                dirs.append(which)
                path.append(p)
                p = p.p[which]
                if p is None:
                    return None, 0
                c = _cmp(item, p.data)
            cnt += _child_size(p, 0) + 1
        else:
            cnt = 1
            p = fake
            while p is not None:
                dirs.append(0)
                path.append(p)
                p = p.p[0]
            p = path.pop()
            dirs.pop()
        for node in path[1:]:
            node.size -= 1
        if p.p[1] is None:
            path[-1].p[dirs[-1]] = p.p[0]
        else:
            q = p.p[1]
            if q.p[0] is None:
                q.p[0] = p.p[0]
                q.balance = p.balance
                path[-1].p[dirs[-1]] = q
                path.append(q)
                dirs.append(1)
                q.size = p.size - 1
            else:
                e = len(path)
                path.append(p)
                dirs.append(1)
                while True:
                    dirs.append(0)
                    path.append(q)
                    r = q.p[0]
                    if r.p[0] is None:
                        break
                    q = r
                r.p[0] = p.p[0]
                q.p[0] = r.p[1]
                r.p[1] = p.p[1]
                r.balance = p.balance
                path[e - 1].p[dirs[e - 1]] = r
                path[e] = r
                dirs[e] = 1
                for node in path[e + 1:]:
                    node.size -= 1
                r.size = p.size - 1
        for d in range(len(path) - 1, 0, -1):
            q = path[d]
            which = dirs[d]
            other = 1 - which
            b1, b2 = (-1, -2) if which else (1, 2)
            q.balance += b1
            if q.balance == b1:
                break
            if q.balance == b2:
                r = q.p[other]
                parent, pd = path[d - 1], dirs[d - 1]
                if r.balance == -b1:
                    parent.p[pd] = _rotate2(q, which)
                else:
                    parent.p[pd] = _rotate1(q, which)
                    if r.balance == 0:
                        r.balance = -b1
                        q.balance = b1
                        break
                    r.balance = q.balance = 0
        self._root = fake.p[0]
        return p.data, cnt

    def iter_from(self, item: Any) -> Iterator[Any]:
        """Iterate in order over the items equal to or greater than ``item``."""
        stack: List[_Node] = []
        p = self._root
        while p is not None:
            c = _cmp(item, p.data)
            if c < 0:
                stack.append(p)
                p = p.p[0]
            elif c > 0:
                p = p.p[1]
            else:
                stack.append(p)
                break
        return _walk(stack)

    def height(self) -> int:
        """Return the number of nodes on the longest root-to-leaf path."""
        best = 0
        todo = [(self._root, 1)] if self._root is not None else []
        while todo:
            node, depth = todo.pop()
            best = max(best, depth)
            for child in node.p:
                if child is not None:
                    todo.append((child, depth + 1))
        return best

    def __repr__(self) -> str:
        return f"AvlTree({list(self)!r})"