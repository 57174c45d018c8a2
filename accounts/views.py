import logging

from django.contrib import messages
from django.contrib.auth.decorators import login_required
from django.shortcuts import redirect, render
from django.urls import reverse

from .decorators import ADMIN_ROLE, VET_ROLE, get_profile, user_has_role, vet_required
from .forms import VetRegistrationForm, first_form_error

logger = logging.getLogger(__name__)


def _role_redirect_for_authenticated_user(user):
    if user_has_role(user, ADMIN_ROLE):
        return reverse("orders:admin_orders")
    if user_has_role(user, VET_ROLE):
        profile = get_profile(user)
        if not profile.is_registration_complete():
            return reverse("accounts:registration")
        return reverse("orders:vet_home")
    return reverse("accounts:missing_profile")


def home_view(request):
    if not request.user.is_authenticated:
        return redirect("login")
    return redirect(_role_redirect_for_authenticated_user(request.user))


@login_required
def missing_profile_view(request):
    return render(request, "accounts/missing_profile.html", status=403)


@vet_required
def registration_view(request):
    profile = get_profile(request.user)
    if profile.is_registration_complete():
        return redirect("orders:vet_home")

    form = VetRegistrationForm(request.POST or None, instance=profile)
    if request.method == "POST":
        if form.is_valid():
            form.save()
            logger.info("Vet %s completed registration", request.user.pk)
            messages.success(request, "Registration completed successfully.")
            return redirect("orders:vet_home")
        messages.error(request, first_form_error(form))

    return render(request, "accounts/registration.html", {"form": form})


@vet_required
def profile_view(request):
    profile = get_profile(request.user)
    form = VetRegistrationForm(request.POST or None, instance=profile)
    if request.method == "POST":
        if form.is_valid():
            form.save()
            messages.success(request, "Profile updated.")
            return redirect("accounts:profile")
        messages.error(request, first_form_error(form))

    return render(
        request,
        "accounts/profile.html",
        {"form": form, "profile": profile, "email": request.user.email},
    )
