from tortoise import BaseDBAsyncClient


async def upgrade(db: BaseDBAsyncClient) -> str:
    return """
        CREATE TABLE IF NOT EXISTS "platform_tokens" (
    "id" UUID NOT NULL PRIMARY KEY,
    "user_id" VARCHAR(255) NOT NULL,
    "platform" VARCHAR(20) NOT NULL,
    "access_token" TEXT NOT NULL,
    "masked_token" TEXT NOT NULL,
    "token_type" VARCHAR(50) NOT NULL DEFAULT 'bearer',
    "scopes" JSONB,
    "expires_at" TIMESTAMPTZ,
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT "uid_platform_t_user_id_5c2f0e" UNIQUE ("user_id", "platform")
);
COMMENT ON COLUMN "platform_tokens"."user_id" IS 'User identifier';
COMMENT ON COLUMN "platform_tokens"."platform" IS 'Hosting platform the token belongs to';
COMMENT ON COLUMN "platform_tokens"."access_token" IS 'Encrypted access token for the platform';
COMMENT ON COLUMN "platform_tokens"."masked_token" IS 'Masked access token for display';
COMMENT ON COLUMN "platform_tokens"."token_type" IS 'Token type';
COMMENT ON COLUMN "platform_tokens"."scopes" IS 'Scopes granted to the token';
COMMENT ON COLUMN "platform_tokens"."expires_at" IS 'Expiry reported by the user';
COMMENT ON COLUMN "platform_tokens"."created_at" IS 'Record creation timestamp';
COMMENT ON COLUMN "platform_tokens"."updated_at" IS 'Record last update timestamp';
COMMENT ON TABLE "platform_tokens" IS 'Per user platform access tokens';
CREATE TABLE IF NOT EXISTS "profiles" (
    "id" UUID NOT NULL PRIMARY KEY,
    "user_id" VARCHAR(255) NOT NULL UNIQUE,
    "email" VARCHAR(255),
    "full_name" VARCHAR(255),
    "avatar_url" VARCHAR(500),
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
);
COMMENT ON COLUMN "profiles"."user_id" IS 'User ID';
COMMENT ON COLUMN "profiles"."email" IS 'Email of user';
COMMENT ON COLUMN "profiles"."full_name" IS 'Display name of user';
COMMENT ON COLUMN "profiles"."avatar_url" IS 'Avatar image URL';
COMMENT ON COLUMN "profiles"."created_at" IS 'Record creation timestamp';
COMMENT ON COLUMN "profiles"."updated_at" IS 'Record update timestamp';
COMMENT ON TABLE "profiles" IS 'User profile information from Clerk';
CREATE TABLE IF NOT EXISTS "repositories" (
    "id" UUID NOT NULL PRIMARY KEY,
    "user_id" VARCHAR(255) NOT NULL,
    "platform" VARCHAR(20) NOT NULL,
    "repo_url" VARCHAR(500) NOT NULL,
    "repo_name" VARCHAR(255) NOT NULL,
    "repo_owner" VARCHAR(255) NOT NULL,
    "is_private" BOOL NOT NULL DEFAULT False,
    "status" VARCHAR(20) NOT NULL DEFAULT 'pending',
    "error_message" TEXT,
    "metadata" JSONB NOT NULL,
    "last_synced_at" TIMESTAMPTZ,
    "created_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    "updated_at" TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    CONSTRAINT "uid_repositorie_user_id_8b1d4a" UNIQUE ("user_id", "repo_url")
);
CREATE INDEX IF NOT EXISTS "idx_repositorie_user_id_2e7c91" ON "repositories" ("user_id", "created_at");
CREATE INDEX IF NOT EXISTS "idx_repositorie_user_id_f04b6d" ON "repositories" ("user_id", "platform");
COMMENT ON COLUMN "repositories"."user_id" IS 'User ID who owns this repository';
COMMENT ON COLUMN "repositories"."platform" IS 'Hosting platform (github/gitlab/replit/lovable)';
COMMENT ON COLUMN "repositories"."repo_url" IS 'Repository URL as entered by the user';
COMMENT ON COLUMN "repositories"."repo_name" IS 'Repository name parsed from the URL';
COMMENT ON COLUMN "repositories"."repo_owner" IS 'Repository owner parsed from the URL';
COMMENT ON COLUMN "repositories"."is_private" IS 'Whether repository is private';
COMMENT ON COLUMN "repositories"."status" IS 'Connection status';
COMMENT ON COLUMN "repositories"."error_message" IS 'Last refresh/reconnect failure reason';
COMMENT ON COLUMN "repositories"."metadata" IS 'Platform metadata, every key optional';
COMMENT ON COLUMN "repositories"."last_synced_at" IS 'Last successful or failed metadata sync';
COMMENT ON COLUMN "repositories"."created_at" IS 'Record creation timestamp';
COMMENT ON COLUMN "repositories"."updated_at" IS 'Record update timestamp';
COMMENT ON TABLE "repositories" IS 'Repositories connected by users';
CREATE TABLE IF NOT EXISTS "aerich" (
    "id" SERIAL NOT NULL PRIMARY KEY,
    "version" VARCHAR(255) NOT NULL,
    "app" VARCHAR(100) NOT NULL,
    "content" JSONB NOT NULL
);"""


async def downgrade(db: BaseDBAsyncClient) -> str:
    return """
        DROP TABLE IF EXISTS "repositories";
        DROP TABLE IF EXISTS "profiles";
        DROP TABLE IF EXISTS "platform_tokens";"""
