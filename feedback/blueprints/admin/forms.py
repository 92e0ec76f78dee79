# feedback/blueprints/admin/forms.py
from flask_wtf import FlaskForm
from flask_wtf.file import FileField, FileRequired
from wtforms import StringField, TextAreaField, SubmitField
from wtforms.validators import DataRequired, Length, Optional as Opt


class ShareForm(FlaskForm):
    name = StringField("Name", validators=[DataRequired(), Length(max=255)])
    description = TextAreaField("Description", validators=[Opt(), Length(max=5000)])
    submit = SubmitField("Create share")


class UploadForm(FlaskForm):
    file = FileField("File", validators=[FileRequired()])
    submit = SubmitField("Upload")


class DeleteForm(FlaskForm):
    # CSRF carrier for the delete buttons
    submit = SubmitField("Delete")
