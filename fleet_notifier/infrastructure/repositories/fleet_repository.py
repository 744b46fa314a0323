"""Read access to the operational records scanned by reminder jobs."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date, datetime, time

from sqlalchemy.orm import Session

from fleet_notifier.domain.entities import (
    DRIVER_STATUS_ACTIVE,
    INCIDENT_STATUS_RESOLVED,
    MAINTENANCE_STATUS_COMPLETED,
    Driver,
    Incident,
    MaintenanceRecord,
    Vehicle,
)
from fleet_notifier.infrastructure.models import (
    DriverModel,
    IncidentModel,
    MaintenanceRecordModel,
    VehicleModel,
)


class FleetRepository:
    """Query vehicles, maintenance records, drivers and incidents."""

    def __init__(self, session: Session) -> None:
        self.session = session

    def list_pending_maintenance(
        self, *, start: date, end: date
    ) -> Sequence[tuple[MaintenanceRecord, Vehicle | None]]:
        query = (
            self.session.query(MaintenanceRecordModel)
            .filter(MaintenanceRecordModel.status != MAINTENANCE_STATUS_COMPLETED)
            .filter(MaintenanceRecordModel.completed_date.is_(None))
            .filter(MaintenanceRecordModel.scheduled_date >= start)
            .filter(MaintenanceRecordModel.scheduled_date <= end)
            .order_by(MaintenanceRecordModel.scheduled_date, MaintenanceRecordModel.id)
        )
        return [
            (self._maintenance_to_entity(model), self._vehicle_to_entity(model.vehicle))
            for model in query.all()
        ]

    def list_expiring_licenses(self, *, start: date, end: date) -> Sequence[Driver]:
        query = (
            self.session.query(DriverModel)
            .filter(DriverModel.status == DRIVER_STATUS_ACTIVE)
            .filter(DriverModel.license_expiry >= start)
            .filter(DriverModel.license_expiry <= end)
            .order_by(DriverModel.license_expiry, DriverModel.id)
        )
        return [self._driver_to_entity(model) for model in query.all()]

    def list_open_incidents(
        self, *, start: date, end: date
    ) -> Sequence[tuple[Incident, Vehicle | None]]:
        query = (
            self.session.query(IncidentModel)
            .filter(IncidentModel.status != INCIDENT_STATUS_RESOLVED)
            .filter(IncidentModel.date >= datetime.combine(start, time.min))
            .filter(IncidentModel.date <= datetime.combine(end, time.max))
            .order_by(IncidentModel.date, IncidentModel.id)
        )
        return [
            (self._incident_to_entity(model), self._vehicle_to_entity(model.vehicle))
            for model in query.all()
        ]

    def add_vehicle(self, vehicle: Vehicle) -> Vehicle:
        model = VehicleModel(
            license_plate=vehicle.license_plate,
            make=vehicle.make,
            model=vehicle.model,
            status=vehicle.status,
        )
        return self._vehicle_to_entity(self._persist(model))

    def add_maintenance(self, record: MaintenanceRecord) -> MaintenanceRecord:
        model = MaintenanceRecordModel(
            vehicle_id=record.vehicle_id,
            service_type=record.service_type,
            description=record.description,
            scheduled_date=record.scheduled_date,
            completed_date=record.completed_date,
            status=record.status,
            cost=record.cost,
        )
        return self._maintenance_to_entity(self._persist(model))

    def add_driver(self, driver: Driver) -> Driver:
        model = DriverModel(
            name=driver.name,
            email=driver.email,
            license_number=driver.license_number,
            license_expiry=driver.license_expiry,
            status=driver.status,
        )
        return self._driver_to_entity(self._persist(model))

    def add_incident(self, incident: Incident) -> Incident:
        model = IncidentModel(
            incident_code=incident.incident_code,
            vehicle_id=incident.vehicle_id,
            driver_id=incident.driver_id,
            type=incident.type,
            severity=incident.severity,
            description=incident.description,
            location=incident.location,
            date=incident.date,
            status=incident.status,
        )
        return self._incident_to_entity(self._persist(model))

    def _persist(self, model):
        self.session.add(model)
        self.session.commit()
        self.session.refresh(model)
        return model

    @staticmethod
    def _vehicle_to_entity(model: VehicleModel | None) -> Vehicle | None:
        if model is None:
            return None
        return Vehicle(
            id=model.id,
            license_plate=model.license_plate,
            make=model.make,
            model=model.model,
            status=model.status,
        )

    @staticmethod
    def _maintenance_to_entity(model: MaintenanceRecordModel) -> MaintenanceRecord:
        return MaintenanceRecord(
            id=model.id,
            vehicle_id=model.vehicle_id,
            service_type=model.service_type,
            scheduled_date=model.scheduled_date,
            status=model.status,
            description=model.description,
            completed_date=model.completed_date,
            cost=float(model.cost) if model.cost is not None else None,
        )

    @staticmethod
    def _driver_to_entity(model: DriverModel) -> Driver:
        return Driver(
            id=model.id,
            name=model.name,
            license_number=model.license_number,
            license_expiry=model.license_expiry,
            email=model.email,
            status=model.status,
        )

    @staticmethod
    def _incident_to_entity(model: IncidentModel) -> Incident:
        return Incident(
            id=model.id,
            incident_code=model.incident_code,
            vehicle_id=model.vehicle_id,
            type=model.type,
            severity=model.severity,
            date=model.date,
            status=model.status,
            driver_id=model.driver_id,
            description=model.description,
            location=model.location,
        )


__all__ = ["FleetRepository"]
