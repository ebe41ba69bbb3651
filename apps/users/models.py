from django.contrib.auth.base_user import BaseUserManager
from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.db import models

from apps.common.models import BaseModel


class AdminManager(BaseUserManager):
    def active_admin(self):
        return self.filter(is_staff=True, is_active=True)

    def create_user(self, username, password, **extra_fields):
        if not username:
            raise ValueError("아이디는 필수입니다.")
        if not password:
            raise ValueError("비밀번호는 필수입니다.")
        email = extra_fields.pop("email", "")
        admin = self.model(username=username, email=self.normalize_email(email), **extra_fields)
        admin.set_password(password)
        admin.save(using=self._db)
        return admin

    def create_superuser(self, username, password, **extra_fields):
        extra_fields.setdefault("is_staff", True)
        extra_fields.setdefault("is_superuser", True)
        return self.create_user(username, password, **extra_fields)


class Admin(BaseModel, AbstractBaseUser, PermissionsMixin):
    username = models.CharField(max_length=50, unique=True)
    name = models.CharField(max_length=30, blank=True)
    email = models.EmailField(blank=True)
    is_active = models.BooleanField(default=True)
    is_staff = models.BooleanField(default=True)
    is_superuser = models.BooleanField(default=False)

    # 로그인 식별자는 username
    USERNAME_FIELD = "username"
    EMAIL_FIELD = "email"

    objects = AdminManager()

    class Meta:
        db_table = "admin"

    def __str__(self):
        return self.username
