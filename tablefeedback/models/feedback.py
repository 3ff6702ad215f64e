from datetime import datetime, timezone
from tablefeedback.extensions import db
from tablefeedback.utils.helpers import as_utc
from tablefeedback.utils.validators import DEFAULT_LOCATION

def _utcnow():
    return datetime.now(timezone.utc)

class Feedback(db.Model):
    __tablename__ = "feedback"

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    table_number = db.Column(db.Integer, nullable=False)
    location = db.Column(db.String(120), nullable=False, default=DEFAULT_LOCATION, server_default=DEFAULT_LOCATION)
    rating = db.Column(db.Integer, nullable=False)
    comment = db.Column(db.Text, nullable=True)
    # storage key under UPLOAD_FOLDER, e.g. "feedback-images/<uuid>.jpg"
    image_path = db.Column(db.String(255), nullable=True)
    # set once at insert; never updated
    timestamp = db.Column(db.DateTime(timezone=True), nullable=False, default=_utcnow, server_default=db.func.now())

    __table_args__ = (
        db.CheckConstraint("rating BETWEEN 1 AND 5", name="ck_feedback_rating_range"),
        db.CheckConstraint("table_number > 0", name="ck_feedback_table_positive"),
        db.Index("ix_feedback_business_timestamp", "business_id", "timestamp"),
    )

    def to_dict(self) -> dict:
        return dict(
            id=self.id,
            business_id=self.business_id,
            table_number=self.table_number,
            location=self.location,
            rating=self.rating,
            comment=self.comment or "",
            image_path=self.image_path,
            timestamp=as_utc(self.timestamp).isoformat() if self.timestamp else None,
        )

    def __repr__(self) -> str:
        return f"<Feedback id={self.id} business_id={self.business_id} table={self.table_number} rating={self.rating}>"
