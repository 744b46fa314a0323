"""SQLAlchemy models for the operational records scanned by reminder jobs."""

from sqlalchemy import Column, Date, DateTime, ForeignKey, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from fleet_notifier.infrastructure.database import Base


class VehicleModel(Base):
    __tablename__ = "vehicle"

    id = Column(Integer, primary_key=True, index=True)
    license_plate = Column(String(20), nullable=False, unique=True)
    make = Column(String(50), nullable=True)
    model = Column(String(50), nullable=True)
    status = Column(String(20), nullable=False, default="active")


class MaintenanceRecordModel(Base):
    """Scheduled maintenance task for a vehicle."""

    __tablename__ = "maintenance_record"

    id = Column(Integer, primary_key=True, index=True)
    vehicle_id = Column(Integer, ForeignKey("vehicle.id"), nullable=False, index=True)
    service_type = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    scheduled_date = Column(Date, nullable=False, index=True)
    completed_date = Column(Date, nullable=True)
    status = Column(String(20), nullable=False, default="scheduled")
    cost = Column(Numeric(10, 2), nullable=True)

    vehicle = relationship("VehicleModel", lazy="joined")


class DriverModel(Base):
    __tablename__ = "driver"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String(100), nullable=False)
    email = Column(String(120), nullable=True)
    license_number = Column(String(50), nullable=False)
    license_expiry = Column(Date, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="active")


class IncidentModel(Base):
    """Incident reported against a vehicle."""

    __tablename__ = "incident"

    id = Column(Integer, primary_key=True, index=True)
    incident_code = Column(String(30), nullable=False, unique=True)
    vehicle_id = Column(Integer, ForeignKey("vehicle.id"), nullable=False, index=True)
    driver_id = Column(Integer, ForeignKey("driver.id"), nullable=True)
    type = Column(String(30), nullable=False)
    severity = Column(String(20), nullable=False)
    description = Column(Text, nullable=True)
    location = Column(String(255), nullable=True)
    date = Column(DateTime, nullable=False, index=True)
    status = Column(String(20), nullable=False, default="pending")

    vehicle = relationship("VehicleModel", lazy="joined")


__all__ = [
    "VehicleModel",
    "MaintenanceRecordModel",
    "DriverModel",
    "IncidentModel",
]
