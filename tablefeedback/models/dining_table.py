from sqlalchemy import UniqueConstraint
from tablefeedback.extensions import db

class DiningTable(db.Model):
    __tablename__ = "tables"

    id = db.Column(db.Integer, primary_key=True)
    business_id = db.Column(db.Integer, db.ForeignKey("businesses.id", ondelete="CASCADE"), nullable=False, index=True)
    table_number = db.Column(db.Integer, nullable=False)
    qr_url = db.Column(db.String(512), nullable=False)

    __table_args__ = (
        UniqueConstraint("business_id", "table_number", name="uq_tables_business_number"),
    )

    def to_dict(self) -> dict:
        return dict(id=self.id, table_number=self.table_number, qr_url=self.qr_url)
