"""Message mappings for API responses."""

class Messages:
    """Centralized messages for API responses."""

    # Authentication messages
    AUTH = {
        "invalid_credentials": "Incorrect email or password",
        "invalid_token": "Could not validate credentials",
        "login_required": "Authentication required. Please login.",
        "refresh_missing": "No refresh token found. Please login again.",
        "account_inactive": "User account is deactivated",
        "logged_out": "Logged out successfully",
    }

    # Access control messages
    ACCESS = {
        "forbidden": "Access denied",
        "role_required": "Access denied. Required roles: {roles}. Your role: {role}",
        "supervisor_only": "Only supervisors can perform this action",
        "own_data_only": "You can only view your own records",
        "cannot_remove_self": "You cannot remove your own supervisor account",
    }

    # General CRUD messages
    CRUD = {
        "created": "Created successfully",
        "updated": "Updated successfully",
        "deleted": "Deleted successfully",
        "not_found": "Record not found",
        "already_exists": "Record already exists",
    }

    # User messages
    USER = {
        "not_found": "User not found",
        "email_exists": "Email is already registered",
        "not_supervisor": "User {user_id} is not a supervisor",
        "supervisor_removed": "Supervisor removed",
    }

    # Teacher messages
    TEACHER = {
        "not_found": "Teacher not found",
        "deleted": "Teacher and related records deleted",
        "invalid_dates": "Birth date must be before join date",
        "password_required": "An initial password is required for this teacher",
    }

    # Evaluation messages
    EVALUATION = {
        "not_found": "Evaluation not found",
        "unknown_section": "Unknown evaluation section: {section}",
        "unknown_category": "Unknown category '{category}' in section '{section}'",
        "missing_category": "Category '{category}' in section '{section}' has no score",
        "score_out_of_range": "Score for '{category}' must be between 1 and 5",
        "malformed_scores": "Evaluation scores are malformed",
    }

    # Settings messages
    SETTINGS = {
        "saved": "Settings saved",
        "duplicate_category": "Duplicate category '{category}' in section '{section}'",
        "no_active_category": "At least one category must stay active",
    }

    # Store messages
    STORE = {
        "unavailable": "The data store is unavailable, please try again later",
        "timeout": "The data store did not answer in time",
    }

    NOTIFICATION = {
        "teacher_added": "New teacher added: {name}",
        "teacher_updated": "Teacher profile updated: {name}",
        "teacher_removed": "Teacher removed: {name}",
        "evaluation_added": "New evaluation recorded for {name}",
        "marked_read": "All notifications marked as read",
    }


def get_message(category: str, key: str, /, **kwargs) -> str:
    """Get a message from the specified category and format it with kwargs."""
    category_messages = getattr(Messages, category.upper(), {})
    message = category_messages.get(key, f"Message not found: {category}.{key}")
    return message.format(**kwargs) if kwargs else message
