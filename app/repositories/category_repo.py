# app/repositories/category_repo.py
from sqlmodel import Session, select

from app.models.category import Category


class CategoryRepository:

    def list_all(self, session: Session) -> list[Category]:
        return list(session.exec(select(Category)).all())

    def get_by_id(self, session: Session, category_id: int) -> Category | None:
        return session.get(Category, category_id)

    def get_by_slug(self, session: Session, slug: str) -> Category | None:
        stmt = select(Category).where(Category.slug == slug)
        return session.exec(stmt).first()

    def create(self, session: Session, category: Category) -> Category:
        session.add(category)
        session.commit()
        session.refresh(category)
        return category
