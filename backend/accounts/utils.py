def get_user_role(request):
    """
    Role of the authenticated user.
    Superusers always act as admin; otherwise the UserProfile decides.
    Returns None for anonymous users or users without a profile.
    """
    user = getattr(request, "user", None)
    if not user or not user.is_authenticated:
        return None
    if user.is_superuser:
        return "admin"

    profile = getattr(user, "profile", None)
    if not profile:
        return None
    return (profile.role or "").strip().lower() or None
