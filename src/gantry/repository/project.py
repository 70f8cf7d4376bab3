# SPDX-License-Identifier: MIT

from copy import deepcopy
from typing import Any, Optional, cast

import pendulum
from yaml import dump, load

try:
    from yaml import CDumper as Dumper
    from yaml import CLoader as Loader  # noqa: F401
except ImportError:
    from yaml import Dumper, Loader  # type: ignore[assignment]

from gantry import configuration, time
from gantry.model.entity_id import EntityId, generate_entity_id
from gantry.model.project import Project


class ProjectRepository:
    def __init__(self) -> None:
        self._projects: Optional[list[Project]] = None
        self.is_dirty = False
        self._dirty_ids: set[str] = set()

    @property
    def projects(self) -> list[Project]:
        if self._projects is None:
            self.__load_data()
        if self._projects is None:
            raise ValueError()
        return self._projects

    def __load_data(self) -> None:
        self._projects = []
        if not configuration.DATA_PROJECTS_DIR.is_dir():
            return
        for file_path in configuration.DATA_PROJECTS_DIR.iterdir():
            if file_path.suffix != ".yaml":
                continue
            raw_project = load(file_path.read_text(), Loader=Loader)
            if raw_project is not None:
                self._projects.append(
                    self.__convert_project_for_deserialization(raw_project)
                )
        self._projects.sort(
            key=lambda project: (project["created"], project["id"] or "")
        )

    def __save_data(self) -> None:
        configuration.DATA_PROJECTS_DIR.mkdir(parents=True, exist_ok=True)
        for project in self.projects:
            if project["id"] in self._dirty_ids:
                serializable_project = self.__convert_project_for_serialization(
                    deepcopy(project)
                )
                file_path = configuration.DATA_PROJECTS_DIR / f"{project['id']}.yaml"
                file_path.write_text(dump(serializable_project, Dumper=Dumper))
        self._dirty_ids.clear()

    def flush(self) -> bool:
        if self._projects is not None and self.is_dirty:
            self.__save_data()
            self.is_dirty = False
            return True
        return False

    def __convert_project_for_serialization(self, project: Project) -> dict[str, Any]:
        serializable_project = cast(dict[str, Any], project)
        serializable_project["start_date"] = time.date_to_str(
            serializable_project["start_date"]
        )
        serializable_project["end_date"] = time.date_to_str(
            serializable_project["end_date"]
        )
        serializable_project["created"] = time.datetime_to_iso_str(
            serializable_project["created"]
        )
        serializable_project["updated"] = time.datetime_to_iso_str(
            serializable_project["updated"]
        )
        return serializable_project

    def __convert_project_for_deserialization(self, project: dict[str, Any]) -> Project:
        deserializable_project = project
        deserializable_project["start_date"] = time.date_from_str(
            str(deserializable_project["start_date"])
        )
        deserializable_project["end_date"] = time.date_from_str(
            str(deserializable_project["end_date"])
        )
        deserializable_project["created"] = time.datetime_from_str(
            deserializable_project["created"]
        )
        deserializable_project["updated"] = time.datetime_from_str(
            deserializable_project["updated"]
        )
        return cast(Project, deserializable_project)

    def __find(self, id: EntityId) -> Project:
        matches = [project for project in self.projects if project["id"] == id]
        if len(matches) == 0:
            raise ValueError(f"No project with id {id}")
        return matches[0]

    def save_new_project(self, project: Project) -> EntityId:
        if project["end_date"] < project["start_date"]:
            raise ValueError(
                f"Project end date {project['end_date']} is before "
                f"start date {project['start_date']}"
            )
        self.is_dirty = True

        project["id"] = generate_entity_id()
        self.projects.append(project)
        self._dirty_ids.add(project["id"])

        return project["id"]

    def modify_project(
        self,
        id: EntityId,
        name: Optional[str] = None,
        code: Optional[str] = None,
        description: Optional[str] = None,
        start_date: Optional[pendulum.Date] = None,
        end_date: Optional[pendulum.Date] = None,
    ) -> None:
        project = self.__find(id)
        new_start = start_date if start_date is not None else project["start_date"]
        new_end = end_date if end_date is not None else project["end_date"]
        if new_end < new_start:
            raise ValueError(
                f"Project end date {new_end} is before start date {new_start}"
            )

        self.is_dirty = True
        self._dirty_ids.add(id)

        project["updated"] = time.now_utc()
        if name is not None:
            project["name"] = name
        if code is not None:
            project["code"] = code
        if description is not None:
            project["description"] = description
        project["start_date"] = new_start
        project["end_date"] = new_end

    def get_all_projects(self) -> list[Project]:
        return deepcopy(self.projects)

    def get_project(self, id: EntityId) -> Project:
        return deepcopy(self.__find(id))


PROJECT_REPO = ProjectRepository()
