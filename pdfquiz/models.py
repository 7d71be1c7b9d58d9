"""Database models."""
from datetime import datetime

from pdfquiz import db
from pdfquiz.domain import Question


class StoredQuestion(db.Model):
    """Saved quiz question. A flat record with no relationships."""
    __tablename__ = 'questions'

    id = db.Column(db.Integer, primary_key=True)
    question = db.Column(db.Text, nullable=False)
    options = db.Column(db.JSON, nullable=False)  # ordered list of option text
    answer = db.Column(db.Text, nullable=False)  # option text, never a label
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __repr__(self):
        return f'<StoredQuestion {self.id}>'

    def to_domain(self) -> Question:
        return Question(
            text=self.question,
            options=tuple(self.options or ()),
            correct_answer=self.answer,
        )

    def to_dict(self):
        return {
            'id': self.id,
            'question': self.question,
            'options': list(self.options or []),
            'answer': self.answer,
        }
