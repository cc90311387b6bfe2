"""
Use Cases Layer (Business Operations)

Structure
---------
usecases/
├── auth/    # register / login
├── tasks/   # task CRUD
└── users/   # account administration

Import from subpackages for clarity:

    from task_api.application.usecases.auth import RegisterUserUseCase
    from task_api.application.usecases.tasks import CreateTaskUseCase
"""
