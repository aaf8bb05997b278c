import logging

from errors import TaskNotFound
from records import CollectionService, find_index, merge

logger = logging.getLogger(__name__)


class TaskService(CollectionService):
    collection = "tasks"

    def list(self) -> list:
        return self._load()

    def create(self, fields: dict) -> dict:
        with self._lock():
            tasks = self._load()
            task = {"id": self.new_id(), **fields}
            tasks.append(task)
            self._save(tasks)
        logger.debug("Created task %s", task["id"])
        return task

    def update(self, task_id, fields: dict) -> dict:
        with self._lock():
            tasks = self._load()
            idx = find_index(tasks, task_id)
            if idx == -1:
                raise TaskNotFound()
            tasks[idx] = merge(tasks[idx], fields)
            self._save(tasks)
            return tasks[idx]

    def delete(self, task_id) -> None:
        with self._lock():
            tasks = self._load()
            remaining = [t for t in tasks if t.get("id") != task_id]
            if len(remaining) == len(tasks):
                raise TaskNotFound()
            self._save(remaining)
        logger.debug("Deleted task %s", task_id)
