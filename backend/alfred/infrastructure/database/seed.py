"""Demo data for a fresh database: three sites in India with feed, actions, risks and weather."""

import logging
from datetime import datetime, timedelta, timezone

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from alfred.domain.entities import (
    ActionItem,
    ActionPriority,
    ActionStatus,
    ActionType,
    Communication,
    CommunicationPriority,
    CommunicationSource,
    CommunicationType,
    Coordinates,
    Project,
    ProjectLocation,
    RiskAssessment,
    RiskImpact,
    RiskProbability,
    WeatherRecord,
    WeatherSnapshot,
)
from alfred.infrastructure.database.models import ProjectModel
from alfred.infrastructure.database.repositories import (
    SQLAlchemyActionItemRepository,
    SQLAlchemyCommunicationRepository,
    SQLAlchemyProjectRepository,
    SQLAlchemyRiskAssessmentRepository,
    SQLAlchemyWeatherRepository,
)

logger = logging.getLogger(__name__)

# location key, city, state, lat, lng, name, capacity, progress, start, end, weather
_SITES = (
    ("mumbai", "Mumbai", "Maharashtra", 19.0760, 72.8777, "Site Alpha Solar Farm",
     "50 MW", 75, "2024-01-15", "2024-10-30", (28, 12, "Partly Cloudy", 65, 1008)),
    ("delhi", "Delhi", "Delhi", 28.7041, 77.1025, "Devra 50MW Project",
     "50 MW", 45, "2024-03-01", "2024-12-15", (32, 8, "Clear", 45, 1012)),
    ("bangalore", "Bangalore", "Karnataka", 12.9716, 77.5946, "Bangalore Green Energy",
     "75 MW", 90, "2023-11-01", "2024-08-30", (25, 15, "Cloudy", 70, 1005)),
)


async def seed_demo_data(session: AsyncSession, now: datetime | None = None) -> bool:
    """Insert the demo records when the projects table is empty.

    Returns True when data was written. The caller commits.
    """
    count = await session.scalar(select(func.count()).select_from(ProjectModel))
    if count:
        logger.debug("Projects table not empty (%d rows) — skipping demo seed", count)
        return False

    now = now or datetime.now(timezone.utc)
    stamp = now.isoformat()
    hour_ago = (now - timedelta(hours=1)).isoformat()

    project_repo = SQLAlchemyProjectRepository(session)
    weather_repo = SQLAlchemyWeatherRepository(session)
    projects: list[Project] = []

    for key, city, state, lat, lng, name, capacity, progress, start, end, reading in _SITES:
        temperature, wind_speed, condition, humidity, pressure = reading
        projects.append(
            await project_repo.create(
                Project(
                    name=name,
                    location=ProjectLocation(city, state, Coordinates(lat=lat, lng=lng)),
                    capacity=capacity,
                    progress=progress,
                    start_date=start,
                    end_date=end,
                    weather=WeatherSnapshot(
                        temperature, wind_speed, condition, humidity, pressure, stamp
                    ),
                )
            )
        )
        await weather_repo.create(
            WeatherRecord(
                location=key,
                temperature=temperature,
                wind_speed=wind_speed,
                condition=condition,
                humidity=humidity,
                pressure=pressure,
                updated_at=stamp,
            )
        )

    alpha, devra = projects[0].id, projects[1].id

    communications = SQLAlchemyCommunicationRepository(session)
    for item in (
        Communication(
            type=CommunicationType.INSIGHT,
            title="Schedule Conflict Detected",
            content="Equipment delivery timeline conflicts with site preparation phase. "
            "Recommend immediate stakeholder coordination.",
            priority=CommunicationPriority.HIGH,
            source=CommunicationSource.AI,
            project_id=alpha,
            tags=["schedule", "conflict", "coordination"],
            posted_at=stamp,
            is_ai=True,
        ),
        Communication(
            type=CommunicationType.STATUS_UPDATE,
            title="EPC Contractor Status Update",
            content="Foundation work progressing on schedule. "
            "Requesting confirmation on electrical delivery timeline.",
            source=CommunicationSource.CONTRACTOR,
            project_id=alpha,
            tags=["foundation", "electrical", "progress"],
            posted_at=hour_ago,
        ),
        Communication(
            type=CommunicationType.PERMIT,
            title="Environmental Permit Approved",
            content="Local authority has approved environmental impact assessment. "
            "Clearing work can proceed as planned.",
            source=CommunicationSource.AUTHORITY,
            project_id=alpha,
            tags=["permit", "environmental", "approval"],
            posted_at=hour_ago,
        ),
    ):
        await communications.create(item)

    actions = SQLAlchemyActionItemRepository(session)
    for item in (
        ActionItem(
            title="RFI from EPC Contractor",
            description="Request for information regarding electrical equipment "
            "specifications and delivery timeline.",
            priority=ActionPriority.HIGH,
            due_date=(now + timedelta(hours=24)).isoformat(),
            project_id=alpha,
            type=ActionType.RFI,
        ),
        ActionItem(
            title="Logistics Delay Risk",
            description="Potential schedule conflict detected in equipment delivery timeline.",
            priority=ActionPriority.HIGH,
            due_date=(now + timedelta(hours=4)).isoformat(),
            project_id=alpha,
            type=ActionType.RISK,
        ),
        ActionItem(
            title="Weather Window Concern",
            description="Extended forecast shows potential impact on construction phase.",
            status=ActionStatus.MONITORING,
            due_date=(now + timedelta(hours=2)).isoformat(),
            project_id=alpha,
            type=ActionType.ALERT,
        ),
    ):
        await actions.create(item)

    risks = SQLAlchemyRiskAssessmentRepository(session)
    await risks.create(
        RiskAssessment(
            project_id=alpha,
            risk_type="Schedule Conflict",
            description="Equipment delivery timeline conflicts with site preparation phase",
            mitigation="Coordinate with logistics team and adjust site preparation schedule",
            impact=RiskImpact.HIGH,
        )
    )
    await risks.create(
        RiskAssessment(
            project_id=devra,
            risk_type="Monsoon Impact",
            description="Extended monsoon season may delay module delivery and installation",
            mitigation="Implement weather contingency plan and adjust project timeline",
            probability=RiskProbability.HIGH,
        )
    )

    logger.info("Seeded demo data: %d projects, 3 communications, 3 actions, 2 risks", len(projects))
    return True
