"""Serializers for validating input and moving domain models in and out of storage.

``.data`` produces JSON-ready primitives; ``save()`` on a validated
serializer returns the domain dataclass.
"""

from rest_framework import serializers

from eventease import conf
from eventease.domain import (
    AttendanceRecord,
    AttendanceStatus,
    Registration,
    RegistrationStatus,
    SearchCriteria,
    SessionState,
    UserInfo,
    UserPreferences,
    UserSession,
)

ATTENDEES_MESSAGE = (
    f"Number of attendees must be between {conf.MIN_ATTENDEES} and {conf.MAX_ATTENDEES}."
)
TERMS_MESSAGE = "You must agree to the terms and conditions."


def _name_messages(label: str) -> dict[str, str]:
    return {
        "required": f"{label} is required.",
        "blank": f"{label} is required.",
        "null": f"{label} is required.",
        "min_length": f"{label} must be between 2 and 50 characters.",
        "max_length": f"{label} must be between 2 and 50 characters.",
    }


def _limit_messages(label: str, limit: int) -> dict[str, str]:
    return {"max_length": f"{label} cannot exceed {limit} characters."}


class RegistrationSerializer(serializers.Serializer):
    """Serializer for Registration domain model.

    Field rules double as submission validation.
    """

    event_id = serializers.IntegerField()
    first_name = serializers.CharField(min_length=2, max_length=50, error_messages=_name_messages("First name"))
    last_name = serializers.CharField(min_length=2, max_length=50, error_messages=_name_messages("Last name"))
    email = serializers.EmailField(
        max_length=100,
        error_messages={
            "required": "Email address is required.",
            "blank": "Email address is required.",
            "null": "Email address is required.",
            "invalid": "Please enter a valid email address.",
            **_limit_messages("Email address", 100),
        },
    )
    phone_number = serializers.CharField(
        max_length=20,
        error_messages={
            "required": "Phone number is required.",
            "blank": "Phone number is required.",
            "null": "Phone number is required.",
            **_limit_messages("Phone number", 20),
        },
    )
    company = serializers.CharField(
        max_length=100, required=False, allow_blank=True, error_messages=_limit_messages("Company name", 100)
    )
    job_title = serializers.CharField(
        max_length=50, required=False, allow_blank=True, error_messages=_limit_messages("Job title", 50)
    )
    number_of_attendees = serializers.IntegerField(
        min_value=conf.MIN_ATTENDEES,
        max_value=conf.MAX_ATTENDEES,
        default=1,
        error_messages={
            "invalid": ATTENDEES_MESSAGE,
            "min_value": ATTENDEES_MESSAGE,
            "max_value": ATTENDEES_MESSAGE,
        },
    )
    special_requirements = serializers.CharField(
        max_length=500,
        required=False,
        allow_blank=True,
        error_messages=_limit_messages("Special requirements", 500),
    )
    comments = serializers.CharField(
        max_length=1000, required=False, allow_blank=True, error_messages=_limit_messages("Additional comments", 1000)
    )
    agree_to_terms = serializers.BooleanField(default=False)
    subscribe_to_newsletter = serializers.BooleanField(default=False)
    registration_id = serializers.IntegerField(required=False, allow_null=True)
    registration_date = serializers.DateTimeField(required=False, allow_null=True)
    status = serializers.ChoiceField(
        choices=[status.value for status in RegistrationStatus],
        default=RegistrationStatus.PENDING.value,
    )

    def validate_agree_to_terms(self, value: bool) -> bool:
        if not value:
            raise serializers.ValidationError(TERMS_MESSAGE)
        return value

    def create(self, validated_data: dict) -> Registration:
        validated_data["status"] = RegistrationStatus(validated_data["status"])
        return Registration(**validated_data)


class AttendanceRecordSerializer(serializers.Serializer):
    """Serializer for AttendanceRecord domain model."""

    attendance_id = serializers.CharField()
    event_id = serializers.IntegerField()
    user_id = serializers.CharField(allow_null=True, allow_blank=True)
    user_name = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    user_email = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    status = serializers.ChoiceField(choices=[status.value for status in AttendanceStatus])
    registered_at = serializers.DateTimeField()
    checked_in_at = serializers.DateTimeField(required=False, allow_null=True)
    checked_out_at = serializers.DateTimeField(required=False, allow_null=True)
    notes = serializers.CharField(required=False, allow_null=True, allow_blank=True)

    def create(self, validated_data: dict) -> AttendanceRecord:
        validated_data["status"] = AttendanceStatus(validated_data["status"])
        return AttendanceRecord(**validated_data)


class SearchCriteriaSerializer(serializers.Serializer):
    event_name = serializers.CharField(required=False, allow_blank=True)
    location = serializers.CharField(required=False, allow_blank=True)
    category = serializers.CharField(required=False, allow_blank=True)
    date = serializers.DateTimeField(required=False, allow_null=True)


class UserInfoSerializer(serializers.Serializer):
    user_id = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    username = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    email = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    is_authenticated = serializers.BooleanField(default=False)
    roles = serializers.ListField(child=serializers.CharField(), required=False)
    last_login = serializers.DateTimeField(required=False, allow_null=True)


class UserPreferencesSerializer(serializers.Serializer):
    theme = serializers.CharField(required=False)
    language = serializers.CharField(required=False)
    time_zone = serializers.CharField(required=False)
    enable_notifications = serializers.BooleanField(required=False)
    default_event_view = serializers.CharField(required=False)
    page_size = serializers.IntegerField(required=False, min_value=1)
    favorite_categories = serializers.ListField(child=serializers.CharField(), required=False)
    custom_settings = serializers.DictField(required=False)


class SessionStateSerializer(serializers.Serializer):
    current_page = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    last_search = SearchCriteriaSerializer(required=False, allow_null=True)
    viewed_event_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    bookmarked_event_ids = serializers.ListField(child=serializers.IntegerField(), required=False)
    component_states = serializers.DictField(required=False)
    last_selected_category = serializers.CharField(required=False, allow_null=True, allow_blank=True)
    current_event_id = serializers.IntegerField(required=False, allow_null=True)
    has_unsaved_changes = serializers.BooleanField(required=False)


class UserSessionSerializer(serializers.Serializer):
    """Serializer for the whole UserSession aggregate."""

    session_id = serializers.CharField()
    session_start_time = serializers.DateTimeField()
    last_activity = serializers.DateTimeField()
    user = UserInfoSerializer()
    preferences = UserPreferencesSerializer()
    state = SessionStateSerializer()
    navigation_history = serializers.ListField(child=serializers.CharField(), required=False)
    custom_data = serializers.DictField(required=False)

    def create(self, validated_data: dict) -> UserSession:
        state_data = dict(validated_data.pop("state"))
        last_search = state_data.pop("last_search", None)
        if last_search is not None:
            state_data["last_search"] = SearchCriteria(**last_search)
        history = validated_data.pop("navigation_history", [])
        return UserSession(
            user=UserInfo(**validated_data.pop("user")),
            preferences=UserPreferences(**validated_data.pop("preferences")),
            state=SessionState(**state_data),
            navigation_history=history[: conf.NAVIGATION_HISTORY_LIMIT],
            **validated_data,
        )
