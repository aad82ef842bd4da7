"""GraphQL API for quizzes: users, quizzes, questions and unique quiz slugs."""
