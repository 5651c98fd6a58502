"""Claim names carried by identity tokens."""

# Session and password-reset tokens identify the user
USER_ID_CLAIM = "userId"
# Invitation tokens bind the invited address
EMAIL_CLAIM = "email"
# Notification parameter holding the token handed to the recipient
TOKEN_PARAM = "token"
