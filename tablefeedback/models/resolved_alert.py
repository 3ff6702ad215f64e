from sqlalchemy import func, UniqueConstraint
from tablefeedback.extensions import db

class ResolvedAlert(db.Model):
    """Marker row: its existence hides the feedback from the unresolved-alert list."""
    __tablename__ = "resolved_alerts"

    id = db.Column(db.Integer, primary_key=True)
    feedback_id = db.Column(db.Integer, db.ForeignKey("feedback.id", ondelete="CASCADE"), nullable=False, index=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    resolved_by = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    resolved_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        UniqueConstraint("feedback_id", "business_id", name="uq_resolved_alerts_feedback_business"),
    )

    def __repr__(self) -> str:
        return f"<ResolvedAlert feedback_id={self.feedback_id} business_id={self.business_id}>"
