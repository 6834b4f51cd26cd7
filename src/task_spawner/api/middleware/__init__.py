"""API middleware package.

Manifesto:
    Cross-cutting concerns (auth, request ids, error mapping) belong in
    middleware so routers stay focused on calling the repository.

Tags:
    ecs-task-spawner, api, middleware

Doc-Types:
    api-reference
"""
