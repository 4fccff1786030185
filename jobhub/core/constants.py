class QueueName:
    SUGGEST_SERVICE_QUEUE = "suggest-service-queue"
    NOTIFICATION_SERVICE_QUEUE = "notification-service-queue"


class SuggestServiceMessageType:
    CREATE_RECRUITMENT = "create_recruitment"
    UPDATE_RECRUITMENT = "update_recruitment"
    DELETE_RECRUITMENT = "delete_recruitment"
