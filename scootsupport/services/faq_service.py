from typing import Any, Dict, List, Optional
from rapidfuzz import fuzz, process
from sqlalchemy.orm import Session
from scootsupport.core.exceptions import ValidationException, NotFoundException
from scootsupport.models.base import utcnow
from scootsupport.repositories.faq_repository import faq_repository
from scootsupport.schemas.support import FAQCreate, FAQUpdate, FAQResponse

def normalize_tags(tags: Optional[List[str]]) -> List[str]:
    """Trim, drop empties and de-duplicate while keeping first-seen order."""
    seen = []
    for tag in tags or []:
        tag = tag.strip()
        if tag and tag not in seen:
            seen.append(tag)
    return seen

class FAQService:
    def list_faqs(self, db: Session) -> List[FAQResponse]:
        return [FAQResponse.model_validate(f) for f in faq_repository.list_ordered(db)]

    def list_active_faqs(self, db: Session, tag: Optional[str] = None) -> List[FAQResponse]:
        faqs = faq_repository.list_ordered(db, active_only=True)
        if tag:
            faqs = [f for f in faqs if tag in (f.tags or [])]
        return [FAQResponse.model_validate(f) for f in faqs]

    def _get_or_404(self, db: Session, faq_id: int):
        faq = faq_repository.get_by_id(db, faq_id)
        if not faq:
            raise NotFoundException("FAQ not found")
        return faq

    def get_faq(self, db: Session, faq_id: int) -> FAQResponse:
        return FAQResponse.model_validate(self._get_or_404(db, faq_id))

    def create_faq(self, db: Session, data: FAQCreate) -> FAQResponse:
        if not data.question or not data.answer:
            raise ValidationException("Question and answer are required")

        faq = faq_repository.create(db, {
            "question": data.question,
            "answer": data.answer,
            "tags": normalize_tags(data.tags),
            "category": data.category or "general",
            "is_active": True if data.is_active is None else data.is_active,
            "display_order": data.display_order or 0
        })
        return FAQResponse.model_validate(faq)

    def update_faq(self, db: Session, faq_id: int, data: FAQUpdate) -> FAQResponse:
        faq = self._get_or_404(db, faq_id)
        changes = {k: v for k, v in data.model_dump(exclude_unset=True).items() if v is not None}
        for field in ("question", "answer"):
            if field in changes and not changes[field]:
                raise ValidationException(f"{field.capitalize()} cannot be empty")
        if "tags" in changes:
            changes["tags"] = normalize_tags(changes["tags"])
        changes["updated_at"] = utcnow()
        faq = faq_repository.update(db, faq, changes)
        return FAQResponse.model_validate(faq)

    def delete_faq(self, db: Session, faq_id: int) -> None:
        faq_repository.delete(db, self._get_or_404(db, faq_id))

    def list_tags(self, db: Session) -> List[str]:
        tags = set()
        for faq in faq_repository.list_ordered(db):
            tags.update(faq.tags or [])
        return sorted(tags)

    def suggest_tags(self, db: Session, query: str, limit: int = 5) -> List[Dict[str, Any]]:
        """Known tags ranked by fuzzy similarity to a partially typed tag."""
        query = (query or "").strip().lower()
        tags = self.list_tags(db)
        if not query:
            return [{"tag": t, "score": 100.0} for t in tags[:limit]]
        matches = process.extract(
            query,
            tags,
            scorer=fuzz.partial_ratio,
            processor=str.lower,
            limit=limit,
            score_cutoff=60
        )
        return [{"tag": tag, "score": round(score, 1)} for tag, score, _ in matches]

faq_service = FAQService()
