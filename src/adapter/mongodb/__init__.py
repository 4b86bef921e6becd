USERS_COLLECTION_NAME = 'usuarios'
