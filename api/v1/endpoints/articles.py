"""
Articles and categories API endpoints.

Responsibility: Public article/category listings and their admin CRUD
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from src.db.models import UserModel
from src.db.repositories import ArticleRepository, CategoryRepository
from src.db.session import get_db
from src.models.article import ArticleFilters, ArticleSort
from api.dependencies import require_admin
from api.v1.schemas.articles import (
    ArticleResponse,
    ArticleDetailResponse,
    ArticleListResponse,
    ArticleCreateRequest,
    ArticleUpdateRequest,
    CategoryResponse,
    CategoryCreateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()
admin_router = APIRouter(prefix="/admin")


def article_list(articles, limit: Optional[int], offset: int) -> dict:
    return {
        "articles": [ArticleResponse.model_validate(a) for a in articles],
        "total": len(articles),
        "limit": limit,
        "offset": offset,
    }


# MARK: Public articles

@router.get("/articles", response_model=ArticleListResponse)
async def list_articles(
    category_id: Optional[int] = Query(None, alias="categoryId", description="Filter by category"),
    search: Optional[str] = Query(None, description="Substring of the title"),
    year: Optional[int] = Query(None, ge=1900, le=2999, description="Publication year"),
    sort: ArticleSort = Query(ArticleSort.NEWEST, description="newest, oldest, views or title"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Number of results"),
    offset: int = Query(0, ge=0, description="Pagination offset"),
    db: AsyncSession = Depends(get_db)
):
    """
    List published articles; every provided filter narrows the result.

    Args:
        category_id: Filter by category ID
        search: Case-insensitive title substring
        year: Keep articles created during this calendar year
        sort: Sort order
        limit: Maximum results to return (1-100)
        offset: Number of results to skip
        db: Database session

    Returns:
        ArticleListResponse
    """
    filters = ArticleFilters(
        category_id=category_id,
        search=search,
        year=year,
        sort=sort,
        limit=limit,
        offset=offset,
    )
    articles = await ArticleRepository(db).list_articles(filters)
    return article_list(articles, limit, offset)


@router.get("/articles/featured", response_model=ArticleListResponse)
async def list_featured_articles(db: AsyncSession = Depends(get_db)):
    articles = await ArticleRepository(db).list_featured()
    return article_list(articles, None, 0)


@router.get("/articles/recent", response_model=ArticleListResponse)
async def list_recent_articles(
    limit: int = Query(5, ge=1, le=50),
    db: AsyncSession = Depends(get_db)
):
    articles = await ArticleRepository(db).list_recent(limit=limit)
    return article_list(articles, limit, 0)


@router.get("/articles/by-category/{category_id}", response_model=ArticleListResponse)
async def list_articles_by_category(
    category_id: int,
    limit: Optional[int] = Query(None, ge=1, le=100),
    db: AsyncSession = Depends(get_db)
):
    articles = await ArticleRepository(db).list_by_category(category_id, limit=limit)
    return article_list(articles, limit, 0)


@router.get("/articles/{slug}", response_model=ArticleDetailResponse)
async def get_article(slug: str, db: AsyncSession = Depends(get_db)):
    """
    Get a published article and count the view.

    Raises:
        HTTPException: 404 if not found or unpublished
    """
    repo = ArticleRepository(db)
    article = await repo.get_by_slug(slug)
    if not article or not article.published:
        raise HTTPException(status_code=404, detail=f"Article '{slug}' not found")

    await repo.increment_views(article.id)
    await db.commit()
    await db.refresh(article)
    return article


# MARK: Public categories

@router.get("/categories", response_model=list[CategoryResponse])
async def list_categories(db: AsyncSession = Depends(get_db)):
    return await CategoryRepository(db).list_categories()


@router.get("/categories/{slug}", response_model=CategoryResponse)
async def get_category(slug: str, db: AsyncSession = Depends(get_db)):
    category = await CategoryRepository(db).get_by_slug(slug)
    if not category:
        raise HTTPException(status_code=404, detail=f"Category '{slug}' not found")
    return category


# MARK: Admin

@admin_router.get("/articles", response_model=ArticleListResponse)
async def admin_list_articles(
    published: Optional[bool] = Query(None, description="Publication flag; any when omitted"),
    search: Optional[str] = Query(None),
    sort: ArticleSort = Query(ArticleSort.NEWEST),
    limit: Optional[int] = Query(None, ge=1, le=200),
    offset: int = Query(0, ge=0),
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    filters = ArticleFilters(
        published=published, search=search, sort=sort, limit=limit, offset=offset
    )
    articles = await ArticleRepository(db).list_articles(filters)
    return article_list(articles, limit, offset)


@admin_router.post(
    "/articles",
    response_model=ArticleDetailResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_article(
    request: ArticleCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    """Create an article; featured=true un-features every other article."""
    try:
        data = request.model_dump()
        data["author_id"] = user.id
        article = await ArticleRepository(db).create(data)
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    logger.info(f"{user.username} created article {article.slug}")
    return article


@admin_router.put("/articles/{article_id}", response_model=ArticleDetailResponse)
async def update_article(
    article_id: int,
    request: ArticleUpdateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    try:
        article = await ArticleRepository(db).update(
            article_id, request.model_dump(exclude_unset=True)
        )
        await db.commit()
    except Exception:
        await db.rollback()
        raise

    if not article:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
    return article


@admin_router.delete("/articles/{article_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_article(
    article_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await ArticleRepository(db).delete(article_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Article {article_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@admin_router.post(
    "/categories",
    response_model=CategoryResponse,
    status_code=status.HTTP_201_CREATED
)
async def create_category(
    request: CategoryCreateRequest,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    category = await CategoryRepository(db).create(
        name=request.name, slug=request.slug, color=request.color
    )
    await db.commit()
    return category


@admin_router.delete("/categories/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    user: UserModel = Depends(require_admin),
    db: AsyncSession = Depends(get_db)
):
    deleted = await CategoryRepository(db).delete(category_id)
    if not deleted:
        raise HTTPException(status_code=404, detail=f"Category {category_id} not found")
    await db.commit()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
