from functools import wraps

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.core.exceptions import PermissionDenied
from django.shortcuts import redirect

from .models import Profile

ADMIN_ROLE = Profile.ROLE_ADMIN
VET_ROLE = Profile.ROLE_VET


def get_profile(user):
    if not user.is_authenticated:
        return None
    try:
        return user.profile
    except Profile.DoesNotExist:
        return None


def user_has_role(user, role):
    if not user.is_authenticated:
        return False
    if role == ADMIN_ROLE and user.is_superuser:
        return True
    profile = get_profile(user)
    return profile is not None and profile.role == role


def role_required(*roles):
    def decorator(view_func):
        @login_required
        @wraps(view_func)
        def wrapped(request, *args, **kwargs):
            if any(user_has_role(request.user, role) for role in roles):
                return view_func(request, *args, **kwargs)
            raise PermissionDenied

        return wrapped

    return decorator


admin_required = role_required(ADMIN_ROLE)
vet_required = role_required(VET_ROLE)


def registration_required(view_func):
    """Send vets with an incomplete profile to the registration form first."""

    @vet_required
    @wraps(view_func)
    def wrapped(request, *args, **kwargs):
        profile = get_profile(request.user)
        if not profile.is_registration_complete():
            messages.info(request, "Please complete your professional profile before using the platform.")
            return redirect("accounts:registration")
        return view_func(request, *args, **kwargs)

    return wrapped
