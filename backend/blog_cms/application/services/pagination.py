"""Shared listing helper used by the owner, public and saved-article views."""

from blog_cms.application.interfaces import ArticleRepository
from blog_cms.domain.entities import Article, ArticleFilter, Page, PageRequest, SortSpec


class ArticlePaginator:
    """Turns raw page/size/sort query values into a clamped, sorted page of articles."""

    def __init__(
        self,
        repository: ArticleRepository,
        default_page_size: int = 10,
        max_page_size: int = 100,
    ):
        self._repository = repository
        self._default_page_size = default_page_size
        self._max_page_size = max_page_size

    def page_request(self, page: int | None, page_size: int | None) -> PageRequest:
        return PageRequest.create(
            page,
            page_size,
            default_size=self._default_page_size,
            max_size=self._max_page_size,
        )

    async def paginate(
        self,
        criteria: ArticleFilter,
        sort: str | None,
        page: int | None = None,
        page_size: int | None = None,
        *,
        default_sort: str,
    ) -> Page[Article]:
        """Return one page; a page past the end is empty rather than an error.

        A blank ``sort`` falls back to ``default_sort``.
        """
        request = self.page_request(page, page_size)
        if not sort or not sort.strip():
            sort = default_sort
        items, total = await self._repository.find(
            criteria,
            SortSpec.parse(sort),
            skip=request.offset,
            limit=request.page_size,
        )
        return Page(items=items, total=total, page=request.page, page_size=request.page_size)
