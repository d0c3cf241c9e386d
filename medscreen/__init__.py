"""Medical screening service: questionnaire scoring and caloric calculation."""
