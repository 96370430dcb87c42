from datetime import datetime
from sqlalchemy import true
from models import db

DIFFICULTIES = ('easy', 'medium', 'hard')

# Fields a partial update may set back to NULL
CLEARABLE_FIELDS = ('description', 'cuisine', 'image_url')

class Recipe(db.Model):
    __tablename__ = 'recipes'
    id = db.Column(db.Integer, primary_key=True)
    author_id = db.Column(db.Integer, db.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, index=True)

    title = db.Column(db.String(200), nullable=False)
    description = db.Column(db.Text)
    ingredients = db.Column(db.JSON, nullable=False, default=list)  # ordered list of strings
    instructions = db.Column(db.JSON, nullable=False, default=list)  # ordered steps
    prep_time = db.Column(db.Integer, nullable=False)
    cook_time = db.Column(db.Integer, nullable=False)
    servings = db.Column(db.Integer, nullable=False)
    difficulty = db.Column(db.String(20), nullable=False)
    cuisine = db.Column(db.String(50))
    image_url = db.Column(db.String(500))
    is_public = db.Column(db.Boolean, nullable=False, default=True, server_default=true())
    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint('prep_time >= 0', name='ck_recipes_prep_time'),
        db.CheckConstraint('cook_time >= 0', name='ck_recipes_cook_time'),
        db.CheckConstraint('servings >= 1', name='ck_recipes_servings'),
    )

    # Relationships
    author = db.relationship('User', back_populates='recipes')
    ratings = db.relationship('Rating', back_populates='recipe', cascade="all, delete-orphan")

    def to_dict(self):
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "ingredients": list(self.ingredients or []),
            "instructions": list(self.instructions or []),
            "prepTime": self.prep_time,
            "cookTime": self.cook_time,
            "servings": self.servings,
            "difficulty": self.difficulty,
            "cuisine": self.cuisine,
            "imageUrl": self.image_url,
            "isPublic": self.is_public,
            "authorId": self.author_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
            "updatedAt": self.updated_at.isoformat() if self.updated_at else None,
        }

    def __repr__(self):
        return f'<Recipe {self.id} {self.title!r}>'
