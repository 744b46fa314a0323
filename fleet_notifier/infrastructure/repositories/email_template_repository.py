"""Persistence helpers for email templates."""

from __future__ import annotations

from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import EmailTemplate
from fleet_notifier.infrastructure.models import EmailTemplateModel


class EmailTemplateRepository:
    """Provide lookups for :class:`EmailTemplate` objects."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def get_active(self, template_type: str, language: str) -> EmailTemplate | None:
        model = (
            self.session.query(EmailTemplateModel)
            .filter(EmailTemplateModel.type == template_type)
            .filter(EmailTemplateModel.language == language)
            .filter(EmailTemplateModel.is_active.is_(True))
            .order_by(EmailTemplateModel.created_at.desc(), EmailTemplateModel.id.desc())
            .first()
        )
        return self._to_entity(model) if model else None

    def create(self, template: EmailTemplate, *, name: str | None = None) -> EmailTemplate:
        model = EmailTemplateModel(
            name=name or f"{template.type}_{template.language}",
            type=template.type,
            language=template.language,
            subject=template.subject,
            html_content=template.html_content,
            text_content=template.text_content,
            is_active=template.is_active,
        )
        if template.created_at is not None:
            model.created_at = template.created_at
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return self._to_entity(model)

    @staticmethod
    def _to_entity(model: EmailTemplateModel) -> EmailTemplate:
        return EmailTemplate(
            id=model.id,
            type=model.type,
            language=model.language,
            subject=model.subject,
            html_content=model.html_content,
            text_content=model.text_content,
            is_active=model.is_active,
            created_at=model.created_at,
        )


__all__ = ["EmailTemplateRepository"]
