"""
Modelo de Cliente de la floristería usando MongoDB (MongoEngine).
"""

from datetime import datetime

from mongoengine import DateTimeField, Document, EmailField, FloatField, StringField

from .schemas import EVENT_TYPES, STATUSES, format_iso_date

ISO_DATE_REGEX = r"^\d{4}-\d{2}-\d{2}$"


class Client(Document):
    """Cliente (prospecto o reserva) almacenado en MongoDB."""

    first_name = StringField(required=True, max_length=100)
    last_name = StringField(required=True, max_length=100)
    email = EmailField(null=True)
    phone = StringField(max_length=40, null=True)
    company = StringField(max_length=200, null=True)
    event_type = StringField(choices=EVENT_TYPES, null=True)
    event_date = StringField(regex=ISO_DATE_REGEX, null=True)
    contact_date = StringField(regex=ISO_DATE_REGEX, null=True)
    status = StringField(required=True, choices=STATUSES, default="prospect")
    budget = FloatField(min_value=0, null=True)
    notes = StringField(null=True)
    created_at = DateTimeField(default=datetime.utcnow)
    updated_at = DateTimeField(default=datetime.utcnow)

    meta = {
        'collection': 'clients',
        'ordering': ['last_name', 'first_name'],
        'indexes': ['last_name', 'status', 'event_date'],
    }

    def save(self, *args, **kwargs):
        self.updated_at = datetime.utcnow()
        return super().save(*args, **kwargs)

    def apply_draft(self, draft):
        """Copia los campos editables de un ``ClientDraft`` (reemplazo completo)."""
        self.first_name = draft.first_name
        self.last_name = draft.last_name
        self.email = draft.email
        self.phone = draft.phone
        self.company = draft.company
        self.event_type = draft.event_type
        self.event_date = format_iso_date(draft.event_date)
        self.contact_date = format_iso_date(draft.contact_date)
        self.status = draft.status
        self.budget = draft.budget
        self.notes = draft.notes
        return self

    def to_dict(self):
        return {
            '_id': str(self.id),
            'firstName': self.first_name,
            'lastName': self.last_name,
            'email': self.email,
            'phone': self.phone,
            'company': self.company,
            'eventType': self.event_type,
            'eventDate': self.event_date,
            'contactDate': self.contact_date,
            'status': self.status,
            'budget': self.budget,
            'notes': self.notes,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
            'updatedAt': self.updated_at.isoformat() if self.updated_at else None,
        }

    def __str__(self):
        return f"{self.first_name} {self.last_name}"
