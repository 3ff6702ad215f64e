from sqlalchemy import func
from tablefeedback.extensions import db

class Business(db.Model):
    __tablename__ = "businesses"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(255), nullable=False)
    owner_email = db.Column(db.String(255), nullable=True)

    created_at = db.Column(db.DateTime(timezone=True), nullable=False, server_default=func.now())

    def to_dict(self) -> dict:
        return dict(id=self.id, name=self.name)

    def __repr__(self) -> str:
        return f"<Business id={self.id} name={self.name!r}>"
