"""
Dashboard state coordinator.

`DashboardState` is a plain container (project list, selected project id,
platform filter). `DashboardCoordinator` owns one state and one project
source, applies selection rules, and re-fetches the whole project list after
every mutation instead of patching local state.
"""
from __future__ import annotations

from typing import List, Optional, Tuple, Union

from pydantic import BaseModel, Field

from src.shared.logging_utils import error as log_error, exception as log_exception, info as log_info
from src.specs.common.enums import ContentStatus, Platform, PlatformFilter
from src.specs.common.errors import ContentCalendarError
from src.specs.common.project_source_spec import ProjectSource
from src.specs.models.domain import (
    ContentDocument,
    ContentDraft,
    ContentUpdate,
    ProjectDocument,
)
from src.views.csv_export import export_csv, export_filename
from src.views.filters import ALL, filter_by_platform, filter_contents, sort_by_publish_date


class DashboardState(BaseModel):
    projects: List[ProjectDocument] = Field(default_factory=list)
    selectedProjectId: Optional[str] = None
    selectedPlatform: PlatformFilter = PlatformFilter.ALL


class DashboardCoordinator:
    def __init__(self, source: ProjectSource, state: Optional[DashboardState] = None) -> None:
        self.source = source
        self.state = state or DashboardState()

    # -- derived views -------------------------------------------------

    @property
    def selected_project(self) -> Optional[ProjectDocument]:
        for project in self.state.projects:
            if project.id == self.state.selectedProjectId:
                return project
        return None

    @property
    def visible_projects(self) -> List[ProjectDocument]:
        return filter_by_platform(self.state.projects, self.state.selectedPlatform)

    def visible_contents(
        self,
        search_text: str = "",
        status_filter: Union[str, ContentStatus] = ALL,
    ) -> List[ContentDocument]:
        project = self.selected_project
        if project is None:
            return []
        return sort_by_publish_date(filter_contents(project.contents, search_text, status_filter))

    def export_selected(
        self,
        search_text: str = "",
        status_filter: Union[str, ContentStatus] = ALL,
    ) -> Optional[Tuple[str, str]]:
        """(filename, csv text) for the selected project's visible rows, or None."""
        project = self.selected_project
        if project is None:
            return None
        return export_filename(project), export_csv(self.visible_contents(search_text, status_filter))

    # -- state transitions ---------------------------------------------

    def load(self) -> DashboardState:
        """Initial fetch; a failure leaves an empty project list."""
        try:
            projects = self.source.list_projects()
        except ContentCalendarError as exc:
            log_error(None, "dashboard:load_failed", error=str(exc))
            projects = []
        self.state = DashboardState(projects=projects)
        return self.state

    def select_project(self, project_id: Optional[str]) -> None:
        self.state.selectedProjectId = project_id

    def change_platform(self, platform: Union[PlatformFilter, Platform, str]) -> None:
        new_filter = PlatformFilter(platform.value if hasattr(platform, "value") else platform)
        self.state.selectedPlatform = new_filter
        selected = self.selected_project
        if new_filter is PlatformFilter.ALL or selected is None:
            return
        if selected.platform.value != new_filter.value:
            matching = filter_by_platform(self.state.projects, new_filter)
            self.state.selectedProjectId = matching[0].id if matching else None

    def refresh(self, select_id: Optional[str] = None) -> bool:
        """Re-fetch every project and select `select_id`; keeps prior state on failure."""
        try:
            projects = self.source.list_projects()
        except ContentCalendarError as exc:
            log_error(None, "dashboard:refresh_failed", error=str(exc))
            return False
        self.state = DashboardState(
            projects=projects,
            selectedProjectId=select_id,
            selectedPlatform=self.state.selectedPlatform,
        )
        return True

    # -- mutations -------------------------------------------------------

    def create_project(
        self,
        name: str,
        platform: Union[Platform, str],
        description: Optional[str] = None,
    ) -> ProjectDocument:
        try:
            project = self.source.create_project(name, platform, description)
        except ContentCalendarError:
            log_exception(None, "dashboard:create_failed", name=name)
            raise
        log_info(project.id, "dashboard:created")
        self.refresh(project.id)
        return project

    def delete_project(self, project_id: str) -> None:
        try:
            self.source.delete_project(project_id)
        except ContentCalendarError:
            log_exception(project_id, "dashboard:delete_failed")
            raise
        self.refresh()

    def add_content(self, draft: ContentDraft) -> Optional[ContentDocument]:
        project_id = self.state.selectedProjectId
        if project_id is None:
            return None
        content = self.source.add_content(project_id, draft)
        self.refresh(project_id)
        return content

    def update_content(self, content_id: str, updates: ContentUpdate) -> bool:
        project_id = self.state.selectedProjectId
        if project_id is None:
            return False
        matched = self.source.update_content(project_id, content_id, updates)
        self.refresh(project_id)
        return matched

    def remove_content(self, content_id: str) -> bool:
        project_id = self.state.selectedProjectId
        if project_id is None:
            return False
        matched = self.source.remove_content(project_id, content_id)
        self.refresh(project_id)
        return matched
