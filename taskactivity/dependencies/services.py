"""
Service providers for controllers
"""
from fastapi import Depends
from sqlmodel import Session

from taskactivity.core.database import get_db, get_query_db
from taskactivity.repositories import (
    UserRepository,
    DropdownValueRepository,
    UserDropdownAccessRepository,
)
from taskactivity.services import (
    UserService,
    DropdownValueService,
    UserDropdownAccessService,
    QueryExecutionService,
)


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    return UserService(UserRepository(db))


def get_dropdown_value_service(db: Session = Depends(get_db)) -> DropdownValueService:
    return DropdownValueService(DropdownValueRepository(db))


def get_user_dropdown_access_service(db: Session = Depends(get_db)) -> UserDropdownAccessService:
    return UserDropdownAccessService(UserDropdownAccessRepository(db), DropdownValueRepository(db))


def get_query_execution_service(db: Session = Depends(get_query_db)) -> QueryExecutionService:
    return QueryExecutionService(db)
