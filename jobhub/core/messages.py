class Message:
    # Common
    SUCCESS = "Success"
    ERROR = "Error"

    # User
    USER_NOT_FOUND = staticmethod(lambda value: f"User with ID/Email: '{value}' not found")
    USER_ALREADY_EXISTS = staticmethod(lambda email: f"User with Email: '{email}' already exists")
    WRONG_CURRENT_PASSWORD = "Current password is incorrect"
    PASSWORD_CHANGED = "Password changed successfully"

    # Auth
    LOGIN_SUCCESSFUL = "Login successful"
    REGISTER_SUCCESSFUL = "Register successful"
    WRONG_EMAIL_OR_PASSWORD = "Wrong email or password"
    INVALID_REFRESH_TOKEN = "Invalid refresh token"
    MISSING_TOKEN = "Missing bearer token"
    INVALID_TOKEN = "Invalid token"

    # Company
    COMPANY_NOT_FOUND = "Company not found"
    COMPANY_CODE_NOT_FOUND = staticmethod(lambda code: f"Company with code: '{code}' not found")
    COMPANY_CODE_ALREADY_EXISTS = staticmethod(lambda code: f"Company with code: '{code}' already exists")
    COMPANY_CREATED = "Company created successfully"
    COMPANY_UPDATED = "Company updated successfully"
    COMPANY_DELETED = "Company deleted successfully"
    COMPANY_HR_NOT_FOUND = staticmethod(lambda hr_id: f"HR account with ID: '{hr_id}' not found in your company")
    COMPANY_HR_DELETED = "HR account deleted successfully"

    # Recruitment
    RECRUITMENT_NOT_FOUND = "Recruitment not found"
    RECRUITMENT_COMPANY_FORBIDDEN = "Recruitment does not belong to your company"
    RECRUITMENT_DEADLINE_PASSED = "Recruitment deadline has passed"
    RECRUITMENT_CREATED = "Recruitment created successfully"
    RECRUITMENT_UPDATED = "Recruitment updated successfully"
    RECRUITMENT_DELETED = "Recruitment deleted successfully"

    # Application
    USER_NOT_ALLOWED_TO_APPLY = "User is not allowed to apply for recruitments"
    USER_ALREADY_APPLIED = staticmethod(lambda name: f"User '{name}' has already applied for this recruitment")
    USER_NOT_APPLIED = staticmethod(lambda name: f"User '{name}' has not applied for this recruitment")
    CV_NOT_FOUND = staticmethod(lambda cv_id: f"CV with ID: '{cv_id}' not found")
    APPLICATION_NOT_FOUND = staticmethod(lambda application_id: f"Application with ID: '{application_id}' not found")
    APPLICATION_NOT_BELONG_TO_USER = "Application does not belong to user's company"
    CREATE_APPLICATION_SUCCESSFULLY = "Applied successfully"
    UPDATE_APPLICATION_SUCCESSFULLY = "Application updated successfully"
    APPLICATION_APPROVED_SUBJECT = staticmethod(lambda title: f"Your application for {title} was approved")
    APPLICATION_REJECTED_SUBJECT = staticmethod(lambda title: f"Your application for {title} was not successful")

    # File
    FILE_NOT_FOUND = "File not found"
    FILE_TOO_LARGE = "File too large"
