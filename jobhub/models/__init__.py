# Database models
from .enums import Role, ApplicationStatus, JobType
from .user import User
from .company import Company
from .recruitment import Recruitment
from .application import Application
from .file import File
from .token import Token
