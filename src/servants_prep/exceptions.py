"""Exceptions raised outside the pure calculation engine"""


class ServantsPrepError(Exception):
    """Base class for package errors"""


class EnrollmentNotFoundError(ServantsPrepError):
    def __init__(self, student_id: str):
        self.student_id = student_id
        super().__init__(f"Enrollment not found for student {student_id}")


class AccessCodeNotFoundError(ServantsPrepError):
    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Access code not found: {code}")


class WeeklyCodeGradeMismatchError(ServantsPrepError):
    def __init__(self, code: str, code_grade, assignment_grade):
        self.code = code
        self.code_grade = code_grade
        self.assignment_grade = assignment_grade
        super().__init__(
            f"Code {code} is for grade {code_grade}, assignment is for {assignment_grade}"
        )


class CodeGenerationError(ServantsPrepError):
    """No unused code could be generated within the attempt limit"""
