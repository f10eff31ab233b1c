"""Request reviews from CODEOWNERS for the files changed in a pull request."""
