from __future__ import annotations


class ClassroomError(Exception):
    """Base class for errors raised by the classroom engine."""


class TimetableEditError(ClassroomError):
    pass


class SubjectCatalogError(ClassroomError):
    pass


class DuplicateSubjectError(SubjectCatalogError):
    def __init__(self, code: str):
        super().__init__(f"Subject code already exists: {code}")
        self.code = code


class EmptySubjectsWarning(UserWarning):
    """Timetable generation was asked to run without any subjects."""
