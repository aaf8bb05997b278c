class PersistenceFailure(Exception):
    """A collection file could not be read, parsed or written."""

    def __init__(self, collection: str, message: str):
        super().__init__(f"{collection}: {message}")
        self.collection = collection


class ServiceError(Exception):
    status_code = 400
    message = "Bad request"
    # user endpoints answer {success, message}, task endpoints only {message}
    envelope = True

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message

    def to_dict(self):
        if self.envelope:
            return {"success": False, "message": self.message}
        return {"message": self.message}


class InvalidCredentials(ServiceError):
    status_code = 401
    message = "Invalid email or password"


class UserExists(ServiceError):
    status_code = 409
    message = "User already exists"


class UserNotFound(ServiceError):
    status_code = 404
    message = "User not found"


class TaskNotFound(ServiceError):
    status_code = 404
    message = "Task not found"
    envelope = False
