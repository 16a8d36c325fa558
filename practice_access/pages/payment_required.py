"""Payment-required page: where doctors without an active subscription land."""

from html import escape

from practice_access.pages._layout import render_page


def render_payment_required_page(app_name: str, max_proof_size_mb: int) -> str:
    """Return HTML explaining how to restore access by uploading a payment proof."""
    body = (
        "        <h1>Subscription required</h1>\n"
        '        <p class="notice">Your subscription is inactive, expired or awaiting '
        "verification.</p>\n"
        "        <p>Upload a payment proof (PDF, JPG or PNG, up to "
        f"{max_proof_size_mb}MB) with <code>POST /api/v1/doctors/me/payment-proof</code>. "
        "If your previous payment was recent your access renews immediately; otherwise "
        "an administrator reviews it.</p>\n"
        '        <p><a href="/api/v1/doctors/me/subscription">Check subscription status</a></p>\n'
    )
    return render_page(f"{escape(app_name)} · Payment required", body)
