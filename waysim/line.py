#! /usr/bin/env python


class CacheLine:
    """Metadata of one cache line. No data is stored."""

    __slots__ = ("valid", "dirty", "tag")

    def __init__(self, valid=False, dirty=False, tag=0):
        self.valid = valid
        self.dirty = dirty
        self.tag = tag

    def fill(self, tag, dirty=False):
        self.valid = True
        self.dirty = dirty
        self.tag = tag

    def invalidate(self):
        self.valid = False
        self.dirty = False

    def swap(self, other):
        self.valid, other.valid = other.valid, self.valid
        self.dirty, other.dirty = other.dirty, self.dirty
        self.tag, other.tag = other.tag, self.tag

    def __eq__(self, other):
        if not isinstance(other, CacheLine):
            return NotImplemented
        return (self.valid, self.dirty, self.tag) == (other.valid, other.dirty, other.tag)

    def __repr__(self):
        return "CacheLine(valid=%s, dirty=%s, tag=%#x)" % (self.valid, self.dirty, self.tag)
