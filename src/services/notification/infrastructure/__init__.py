from .ses_mail_sender import SesMailSender as SesMailSender
