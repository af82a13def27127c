# utils/firebase_service.py - Firebase Admin bootstrap shared by the store and identity ports
import firebase_admin
from firebase_admin import credentials, firestore
import json
import os
from typing import Optional
import logging

logger = logging.getLogger(__name__)


class FirebaseService:
    _initialized = False
    _app = None

    @classmethod
    def initialize(cls) -> firebase_admin.App:
        """Initialize Firebase Admin SDK once"""
        if cls._initialized:
            return cls._app

        firebase_service_account = os.getenv('FIREBASE_SERVICE_ACCOUNT')
        project_id = os.getenv('FIREBASE_PROJECT_ID')
        options = {"projectId": project_id} if project_id else None

        if firebase_service_account:
            try:
                service_account_info = json.loads(firebase_service_account)
            except json.JSONDecodeError as e:
                logger.error(f"Error parsing Firebase service account JSON: {e}")
                raise

            # Validate required fields
            required_fields = ['type', 'project_id', 'private_key', 'client_email']
            missing = [f for f in required_fields if f not in service_account_info]
            if missing:
                raise ValueError(f"Missing required fields in service account: {missing}")

            cred = credentials.Certificate(service_account_info)
            project_id = project_id or service_account_info.get('project_id')
        else:
            # Cloud Functions / Cloud Run, or GOOGLE_APPLICATION_CREDENTIALS locally
            cred = credentials.ApplicationDefault()

        cls._app = firebase_admin.initialize_app(cred, options)
        cls._initialized = True

        logger.info(f"Firebase initialized successfully for project: {project_id or 'default'}")
        return cls._app

    @classmethod
    def is_initialized(cls) -> bool:
        return cls._initialized

    @classmethod
    def firestore_client(cls, app: Optional[firebase_admin.App] = None):
        return firestore.client(app or cls.initialize())
