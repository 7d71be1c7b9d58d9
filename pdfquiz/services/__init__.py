"""Business logic: extraction, generation, storage, quiz sessions."""
