import logging

from fastapi import APIRouter, Depends, HTTPException, Query
from fastapi.encoders import jsonable_encoder
from sqlalchemy import and_, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from database import get_db
from helper import paginate
from models import BlogPost, BlogPostDB
from models.Base import utcnow
from routes.user_route import require_admin

logger = logging.getLogger(__name__)

blog_router = APIRouter(
    tags=["Blog"]
)

admin_blog_router = APIRouter(
    prefix="/admin",
    tags=["Admin Blog"],
    dependencies=[Depends(require_admin)]
)

def _post_summary(post: BlogPostDB) -> dict:
    published_or_created = post.published_at or post.created_at
    return {
        "id": post.id,
        "slug": post.slug,
        "title": post.title,
        "excerpt": post.excerpt,
        "featured_image_url": post.featured_image_url,
        "reading_time": post.reading_time,
        "tags": post.tags or [],
        "published_at": post.published_at,
        "created_at": post.created_at,
        "date": published_or_created.date().isoformat() if published_or_created else None,
    }

def _post_detail(post: BlogPostDB) -> dict:
    detail = _post_summary(post)
    detail.update({
        "content": post.content,
        "seo_title": post.seo_title,
        "seo_description": post.seo_description,
    })
    return detail

def _admin_post(post: BlogPostDB) -> dict:
    detail = _post_detail(post)
    detail.update({
        "is_published": post.is_published,
        "updated_at": post.updated_at,
    })
    return detail

def _apply_post(db_post: BlogPostDB, post: BlogPost):
    db_post.slug = post.slug
    db_post.title = post.title
    db_post.excerpt = post.excerpt
    db_post.content = post.content_json()
    db_post.featured_image_url = str(post.featured_image_url) if post.featured_image_url else None
    db_post.reading_time = post.reading_time
    db_post.tags = post.tags
    db_post.is_published = post.is_published
    # publishing without a date stamps it now
    db_post.published_at = post.published_at or (utcnow() if post.is_published else None)
    db_post.seo_title = post.seo_title or None
    db_post.seo_description = post.seo_description or None

def _published(db: Session):
    return db.query(BlogPostDB).filter(BlogPostDB.is_published.is_(True))

@blog_router.get("/blog", tags=["Blog"])
def get_posts(page: int = Query(1, ge=1), limit: int = Query(20, ge=1, le=100), db: Session = Depends(get_db)):
    """
    Lists published posts, newest first.

    Returns:
        dict: The posts of the page and pagination metadata.
    """
    try:
        query = _published(db).order_by(
            BlogPostDB.published_at.desc().nulls_last(),
            BlogPostDB.created_at.desc()
        )
        rows, pagination = paginate(query, page, limit)
        return {"posts": jsonable_encoder([_post_summary(row) for row in rows]), "pagination": pagination}
    except SQLAlchemyError:
        logger.exception("Failed to fetch blog posts")
        raise HTTPException(status_code=500, detail="Failed to fetch blog posts")

@blog_router.get("/blog/{slug}", tags=["Blog"])
def get_post(slug: str, db: Session = Depends(get_db)):
    """
    Returns a published post with links to its neighbours.

    Args:
        slug (str): The post slug.

    Returns:
        dict: The post and the previous/next post (slug and title) if any.
    """
    try:
        post = _published(db).filter(BlogPostDB.slug == slug).first()
        if not post:
            raise HTTPException(status_code=404, detail="Post not found")

        previous_post = _published(db).filter(or_(
            BlogPostDB.published_at < post.published_at,
            and_(BlogPostDB.published_at == post.published_at, BlogPostDB.created_at < post.created_at)
        )).order_by(BlogPostDB.published_at.desc().nulls_last(), BlogPostDB.created_at.desc()).first()

        next_post = _published(db).filter(or_(
            BlogPostDB.published_at > post.published_at,
            and_(BlogPostDB.published_at == post.published_at, BlogPostDB.created_at > post.created_at)
        )).order_by(BlogPostDB.published_at.asc().nulls_last(), BlogPostDB.created_at.asc()).first()

        return {
            "post": jsonable_encoder(_post_detail(post)),
            "navigation": {
                "previous": {"slug": previous_post.slug, "title": previous_post.title} if previous_post else None,
                "next": {"slug": next_post.slug, "title": next_post.title} if next_post else None,
            }
        }
    except HTTPException:
        raise
    except SQLAlchemyError:
        logger.exception("Failed to fetch blog post %s", slug)
        raise HTTPException(status_code=500, detail="Failed to fetch blog post")

@admin_blog_router.get("/blog", tags=["Admin Blog"])
def get_all_posts(page: int = Query(1, ge=1), limit: int = Query(20, ge=1, le=100), db: Session = Depends(get_db)):
    try:
        query = db.query(BlogPostDB).order_by(BlogPostDB.updated_at.desc(), BlogPostDB.created_at.desc())
        rows, pagination = paginate(query, page, limit)
        return {"posts": jsonable_encoder([_admin_post(row) for row in rows]), "pagination": pagination}
    except SQLAlchemyError:
        logger.exception("Failed to fetch posts")
        raise HTTPException(status_code=500, detail="Failed to fetch posts")

@admin_blog_router.get("/blog/{id}", tags=["Admin Blog"])
def get_post_by_id(id: int, db: Session = Depends(get_db)):
    post = db.query(BlogPostDB).filter(BlogPostDB.id == id).first()
    if not post:
        raise HTTPException(status_code=404, detail="Post not found")
    return {"post": jsonable_encoder(_admin_post(post))}

@admin_blog_router.post("/blog", status_code=201, tags=["Admin Blog"])
def create_post(post: BlogPost, db: Session = Depends(get_db)):
    db_post = BlogPostDB()
    _apply_post(db_post, post)
    try:
        db.add(db_post)
        db.commit()
        db.refresh(db_post)
        return {"success": True, "post": jsonable_encoder(_admin_post(db_post))}
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="A post with this slug already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to create post %s", post.slug)
        raise HTTPException(status_code=500, detail="Failed to create post")

@admin_blog_router.put("/blog/{id}", tags=["Admin Blog"])
def update_post(id: int, post: BlogPost, db: Session = Depends(get_db)):
    db_post = db.query(BlogPostDB).filter(BlogPostDB.id == id).first()
    if not db_post:
        raise HTTPException(status_code=404, detail="Post not found")

    try:
        _apply_post(db_post, post)
        db_post.updated_at = utcnow()
        db.commit()
        db.refresh(db_post)
        return {"success": True, "post": jsonable_encoder(_admin_post(db_post))}
    except IntegrityError:
        db.rollback()
        raise HTTPException(status_code=409, detail="A post with this slug already exists")
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to update post %s", id)
        raise HTTPException(status_code=500, detail="Failed to update post")

@admin_blog_router.delete("/blog/{id}", tags=["Admin Blog"])
def delete_post(id: int, db: Session = Depends(get_db)):
    db_post = db.query(BlogPostDB).filter(BlogPostDB.id == id).first()
    if not db_post:
        raise HTTPException(status_code=404, detail="Post not found")

    try:
        db.delete(db_post)
        db.commit()
        return {"success": True, "deleted": id}
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Failed to delete post %s", id)
        raise HTTPException(status_code=500, detail="Failed to delete post")
