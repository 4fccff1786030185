import enum


class Role(str, enum.Enum):
    ADMIN = "ADMIN"
    COMPANY_ADMIN = "COMPANY_ADMIN"
    COMPANY_HR = "COMPANY_HR"
    USER = "USER"


class ApplicationStatus(str, enum.Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class JobType(str, enum.Enum):
    FULL_TIME = "FULL_TIME"
    PART_TIME = "PART_TIME"
    INTERNSHIP = "INTERNSHIP"
    FREELANCE = "FREELANCE"
    REMOTE = "REMOTE"
