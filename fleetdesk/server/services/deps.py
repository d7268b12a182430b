"""
Service dependencies.

Annotated FastAPI dependencies for the repository bundle, the realtime
manager, the notification senders and file storage. Tests override
``get_session`` (and the sender and clock factories) on the app.
"""

from datetime import date
from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from fleetdesk.core.database import get_session
from fleetdesk.core.database.repositories import SqlRepoBundle, build_sql_repos_from_session
from fleetdesk.notifications import ResendEmailSender, TwilioSmsSender
from fleetdesk.realtime import RealtimeManager, get_realtime_manager
from fleetdesk.storage import LocalFileStorage, get_storage


async def get_repos(session: AsyncSession = Depends(get_session)) -> SqlRepoBundle:
    return build_sql_repos_from_session(session=session)


def get_email_sender() -> ResendEmailSender:
    return ResendEmailSender()


def get_sms_sender() -> TwilioSmsSender:
    return TwilioSmsSender()


def get_today() -> date:
    """Business date used for due dates, overdue checks and billing months."""
    return date.today()


SessionDep = Annotated[AsyncSession, Depends(get_session)]
ReposDep = Annotated[SqlRepoBundle, Depends(get_repos)]
RealtimeDep = Annotated[RealtimeManager, Depends(get_realtime_manager)]
EmailSenderDep = Annotated[ResendEmailSender, Depends(get_email_sender)]
SmsSenderDep = Annotated[TwilioSmsSender, Depends(get_sms_sender)]
StorageDep = Annotated[LocalFileStorage, Depends(get_storage)]
TodayDep = Annotated[date, Depends(get_today)]
