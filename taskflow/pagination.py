from collections import namedtuple
from . import conf


TaskList = namedtuple('TaskList', ['list', 'total'])


class Pagination:
    """1-based page number and page size used by list operations"""

    def __init__(self, page=1, per_page=None):
        if page < 1:
            raise ValueError('page must be >= 1')
        self.page = page
        self.per_page = per_page or conf.page_size()

    @property
    def offset(self):
        return (self.page - 1) * self.per_page

    def slice(self, qs):
        return qs[self.offset:self.offset + self.per_page]

    def __repr__(self):
        return f'Pagination(page={self.page}, per_page={self.per_page})'
