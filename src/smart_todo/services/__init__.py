"""Services for smart-todo: store gateway, todo boards, chat and configuration."""
