from sqlalchemy import Column, Integer, String, DateTime, LargeBinary, UniqueConstraint
from datetime import datetime
from app.core.database import Base

class Blob(Base):
    __tablename__ = "blobs"
    __table_args__ = (UniqueConstraint("bucket", "key", name="uq_blobs_bucket_key"),)

    id = Column(Integer, primary_key=True, index=True)
    bucket = Column(String, nullable=False, index=True)  # "images" ou "files"
    key = Column(String, nullable=False)
    content_type = Column(String, nullable=False, default="application/octet-stream")
    data = Column(LargeBinary, nullable=False)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, default=datetime.utcnow)
