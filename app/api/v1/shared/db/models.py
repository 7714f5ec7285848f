from sqlalchemy import JSON, Column, Float, Integer, String

from app.api.v1.shared.db.base import Base


class ProductRecord(Base):
    __tablename__ = "products"

    product_id = Column(String, primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    name = Column(String, nullable=False)
    legend_url = Column(String, nullable=True)
    kind = Column(String, nullable=False, default="other")


class SceneRecord(Base):
    __tablename__ = "scenes"

    scene_uid = Column(String, primary_key=True)
    # Catalog order, used as the tie-breaker for equal start times
    position = Column(Integer, nullable=False, index=True)
    product_id = Column(String, index=True, nullable=False)
    title = Column(String, nullable=False)
    datetime_start = Column(String, index=True, nullable=False)
    datetime_end = Column(String, nullable=False)
    sensors = Column(JSON, nullable=False, default=list)
    resolution_m = Column(Float, nullable=True)
    bbox = Column(JSON, nullable=False)
    footprint = Column(JSON, nullable=True)
    assets = Column(JSON, nullable=False)
